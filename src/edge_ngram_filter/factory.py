from __future__ import annotations

import logging
from typing import Any, Mapping

from .config import EdgeNGramSettings, edge_ngram_settings_from_mapping
from .edge_ngram import (
    FILTER_NAMES,
    ConfigurationError,
    EdgeNGramTokenFilter,
    side_from_label,
)
from .filters import ASCIIFoldingFilter, LowercaseFilter
from .tokenization import KeywordTokenizer, Tokenizer, TokenStream, WhitespaceTokenizer

logger = logging.getLogger(__name__)

TOKENIZER_NAMES = ("whitespace", "keyword")
SIMPLE_FILTERS = {
    "lowercase": LowercaseFilter,
    "asciifolding": ASCIIFoldingFilter,
}


class EdgeNGramFilterFactory:
    """Turns a named settings block into edge n-gram filters around new sources."""

    def __init__(
        self, name: str, settings: EdgeNGramSettings | Mapping[str, Any] | None = None
    ) -> None:
        if not isinstance(settings, EdgeNGramSettings):
            settings = edge_ngram_settings_from_mapping(settings)
        self.name = name
        self.settings = settings
        self.side = side_from_label(settings.side)
        logger.debug(
            "Configured %s: side=%s min_gram=%d max_gram=%d preserve_positions=%s",
            name,
            settings.side,
            settings.min_gram,
            settings.max_gram,
            settings.preserve_positions,
        )

    def create(self, source: TokenStream) -> EdgeNGramTokenFilter:
        return EdgeNGramTokenFilter(
            source,
            self.side,
            self.settings.min_gram,
            self.settings.max_gram,
            self.settings.preserve_positions,
        )


def create_tokenizer(name: str, text: str = "") -> Tokenizer:
    """Factory for building tokenizers by name."""
    normalized = name.lower().strip()
    if normalized == "whitespace":
        return WhitespaceTokenizer(text)
    if normalized == "keyword":
        return KeywordTokenizer(text)
    raise ConfigurationError(f"Unknown tokenizer '{name}'.")


def create_filter(name: str, source: TokenStream, **options: Any) -> TokenStream:
    """Factory for wrapping ``source`` in a filter selected by name."""
    if name in FILTER_NAMES:
        return EdgeNGramFilterFactory(name, options).create(source)
    normalized = name.lower().strip()
    filter_cls = SIMPLE_FILTERS.get(normalized)
    if filter_cls is None:
        raise ConfigurationError(f"Unknown filter '{name}'.")
    if options:
        logger.warning("Ignoring options %s for filter '%s'.", sorted(options), name)
    return filter_cls(source)
