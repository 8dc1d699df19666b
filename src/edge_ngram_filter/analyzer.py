from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .config import AnalyzerConfig, FilterSettings
from .factory import create_filter, create_tokenizer
from .models import Token
from .tokenization import TokenStream

logger = logging.getLogger(__name__)


class Analyzer:
    """
    A tokenizer followed by a chain of filters, built once and reused.

    Every call to ``analyze`` attaches the new text to the tokenizer and resets
    each stage, tokenizer first, before draining the last stage.
    """

    def __init__(
        self,
        tokenizer_name: str = "whitespace",
        filter_settings: Sequence[FilterSettings] = (),
    ) -> None:
        self.tokenizer = create_tokenizer(tokenizer_name)
        self.stages: List[TokenStream] = [self.tokenizer]
        stream: TokenStream = self.tokenizer
        for settings in filter_settings:
            stream = create_filter(settings.type, stream, **settings.options)
            self.stages.append(stream)
        self.stream = stream

    def analyze(self, text: str) -> List[Token]:
        """Run ``text`` through the chain and return every emitted token."""
        self.tokenizer.set_text(text)
        for stage in self.stages:
            stage.reset()
        tokens = list(self.stream)
        logger.debug("Analyzed %d characters into %d tokens", len(text), len(tokens))
        return tokens


def build_analyzer_from_config(config: AnalyzerConfig) -> Analyzer:
    """Convenience helper to build an Analyzer from AnalyzerConfig."""
    return Analyzer(config.tokenizer, config.filters)


def token_positions(tokens: Iterable[Token]) -> List[int]:
    """Absolute positions implied by the tokens' position increments."""
    positions: List[int] = []
    position = -1
    for token in tokens:
        position += token.position_increment
        positions.append(position)
    return positions
