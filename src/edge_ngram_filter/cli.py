from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .analyzer import build_analyzer_from_config, token_positions
from .config import AnalyzerConfig, FilterSettings, load_config
from .edge_ngram import FILTER_NAME, FILTER_NAMES
from .factory import TOKENIZER_NAMES
from .models import Token

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
logger = logging.getLogger(__name__)

app = typer.Typer(help="Edge n-gram token filter CLI.", no_args_is_help=True)


class TokenPayload(TypedDict):
    text: str
    start_offset: int
    end_offset: int
    position_increment: int
    position: int


@app.command()
def analyze(
    text: str | None = typer.Option(None, "--text", "-t", help="Text to analyze."),
    input_path: Path | None = typer.Option(
        None,
        "--input-path",
        exists=True,
        readable=True,
        dir_okay=False,
        file_okay=True,
        help="UTF-8 text file to analyze.",
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    tokenizer: str | None = typer.Option(
        None,
        "--tokenizer",
        help=f"Tokenizer to use ({', '.join(TOKENIZER_NAMES)}).",
    ),
    side: str | None = typer.Option(
        None, "--side", help="Edge to take n-grams from ('front' or 'back')."
    ),
    min_gram: int | None = typer.Option(None, "--min-gram", help="Smallest n-gram size."),
    max_gram: int | None = typer.Option(None, "--max-gram", help="Largest n-gram size."),
    preserve_positions: bool | None = typer.Option(
        None,
        "--preserve-positions/--no-preserve-positions",
        help="Keep source token position gaps and stack grams of one token.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Analyze text and emit the resulting tokens as JSON."""
    _configure_logging(verbose)
    if (text is None) == (input_path is None):
        raise typer.BadParameter("Provide exactly one of --text or --input-path.")
    source_text = text if text is not None else input_path.read_text(encoding="utf-8")

    try:
        cfg = load_config(config)
        if tokenizer:
            cfg.tokenizer = tokenizer
        _apply_edge_ngram_overrides(cfg, side, min_gram, max_gram, preserve_positions)
        analyzer = build_analyzer_from_config(cfg)
    except (ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    tokens = analyzer.analyze(source_text)
    logger.info("Emitted %d tokens", len(tokens))
    typer.echo(json.dumps({"tokens": _tokens_payload(tokens)}, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = AnalyzerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _apply_edge_ngram_overrides(
    config: AnalyzerConfig,
    side: str | None,
    min_gram: int | None,
    max_gram: int | None,
    preserve_positions: bool | None,
) -> None:
    """Apply CLI overrides to every edge n-gram filter, adding one if none is configured."""
    overrides = {
        "side": side,
        "min_gram": min_gram,
        "max_gram": max_gram,
        "preserve_positions": preserve_positions,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return
    targets = [item for item in config.filters if item.type in FILTER_NAMES]
    if not targets:
        targets = [FilterSettings(type=FILTER_NAME)]
        config.filters.append(targets[0])
    for item in targets:
        item.options.update(overrides)


def _tokens_payload(tokens: List[Token]) -> List[TokenPayload]:
    """Serialize tokens, including absolute positions, for JSON output."""
    return [
        {
            "text": token.text,
            "start_offset": token.start_offset,
            "end_offset": token.end_offset,
            "position_increment": token.position_increment,
            "position": position,
        }
        for token, position in zip(tokens, token_positions(tokens))
    ]


if __name__ == "__main__":
    main()
