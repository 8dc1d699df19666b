from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping

import yaml

from .edge_ngram import (
    DEFAULT_MAX_GRAM_SIZE,
    DEFAULT_MIN_GRAM_SIZE,
    DEFAULT_PRESERVE_POSITIONS,
    DEFAULT_SIDE,
    FILTER_NAME,
    ConfigurationError,
)

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


@dataclass(slots=True)
class EdgeNGramSettings:
    """Settings block for the edge n-gram filter."""

    side: str = DEFAULT_SIDE.label
    min_gram: int = DEFAULT_MIN_GRAM_SIZE
    max_gram: int = DEFAULT_MAX_GRAM_SIZE
    preserve_positions: bool = DEFAULT_PRESERVE_POSITIONS


@dataclass(slots=True)
class FilterSettings:
    """A named filter plus its raw options."""

    type: str
    options: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, **self.options}


@dataclass(slots=True)
class AnalyzerConfig:
    """Configuration options for an analysis chain."""

    tokenizer: str = "whitespace"
    filters: List[FilterSettings] = field(
        default_factory=lambda: [FilterSettings(type=FILTER_NAME)]
    )

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return {
            "tokenizer": self.tokenizer,
            "filters": [item.to_dict() for item in self.filters],
        }


def coerce_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Setting '{key}' must be an integer, got {value!r}.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ConfigurationError(
                f"Setting '{key}' must be an integer, got {value!r}."
            ) from exc
    raise ConfigurationError(f"Setting '{key}' must be an integer, got {value!r}.")


def coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"Setting '{key}' must be a boolean, got {value!r}.")


def edge_ngram_settings_from_mapping(
    data: Mapping[str, Any] | None,
) -> EdgeNGramSettings:
    """Build EdgeNGramSettings from loosely typed values, applying defaults."""
    settings = EdgeNGramSettings()
    if not data:
        return settings
    if "side" in data and data["side"] is not None:
        settings.side = str(data["side"])
    if "min_gram" in data:
        settings.min_gram = coerce_int(data["min_gram"], "min_gram")
    if "max_gram" in data:
        settings.max_gram = coerce_int(data["max_gram"], "max_gram")
    if "preserve_positions" in data:
        settings.preserve_positions = coerce_bool(
            data["preserve_positions"], "preserve_positions"
        )
    return settings


def _build_filter_settings(value: Any) -> FilterSettings:
    if isinstance(value, FilterSettings):
        return value
    if isinstance(value, str):
        return FilterSettings(type=value)
    if isinstance(value, Mapping):
        if "type" not in value:
            raise ConfigurationError("Filter entries must declare a 'type'.")
        options = {key: value[key] for key in value if key != "type"}
        return FilterSettings(type=str(value["type"]), options=options)
    raise ConfigurationError(f"Unsupported filter entry: {value!r}")


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {item.name for item in fields(AnalyzerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "tokenizer" in kwargs and not isinstance(kwargs["tokenizer"], str):
        raise ConfigurationError(
            f"Setting 'tokenizer' must be a name, got {kwargs['tokenizer']!r}."
        )
    if "filters" in kwargs:
        raw_filters = kwargs["filters"] or []
        if isinstance(raw_filters, (str, Mapping)):
            raw_filters = [raw_filters]
        kwargs["filters"] = [_build_filter_settings(item) for item in raw_filters]
    return kwargs


def config_from_dict(data: Mapping[str, Any] | None) -> AnalyzerConfig:
    """Build an AnalyzerConfig from a dictionary-like input."""
    if data is None:
        return AnalyzerConfig()
    return AnalyzerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> AnalyzerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> AnalyzerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return AnalyzerConfig()
    return config_from_yaml(path)
