"""
Tiny helper script that runs the back-edge analyzer over a sample sentence.
"""

from __future__ import annotations

from edge_ngram_filter.analyzer import build_analyzer_from_config, token_positions
from edge_ngram_filter.config import AnalyzerConfig, FilterSettings


def main() -> None:
    config = AnalyzerConfig(
        tokenizer="whitespace",
        filters=[
            FilterSettings(type="lowercase"),
            FilterSettings(
                type="edge_ngram_2",
                options={
                    "side": "back",
                    "min_gram": 2,
                    "max_gram": 3,
                    "preserve_positions": True,
                },
            ),
        ],
    )

    analyzer = build_analyzer_from_config(config)
    tokens = analyzer.analyze("Searching a Suffix index")
    for token, position in zip(tokens, token_positions(tokens)):
        print(
            f"{token.text:>6} offsets=({token.start_offset}, {token.end_offset}) "
            f"increment={token.position_increment} position={position}"
        )


if __name__ == "__main__":
    main()
