from __future__ import annotations

from typing import Sequence

from edge_ngram_filter.filters import TokenFilter
from edge_ngram_filter.models import Token
from edge_ngram_filter.tokenization import TokenStream

LARGE_GAP_TERMS = {"largegap", "/"}


class LargePositionGapFilter(TokenFilter):
    """Sets a position increment of 10 on the terms "largegap" and "/"."""

    def transform(self, token: Token) -> Token:
        if token.text not in LARGE_GAP_TERMS:
            return token
        return Token(
            text=token.text,
            start_offset=token.start_offset,
            end_offset=token.end_offset,
            position_increment=10,
        )


def assert_tokens(
    stream: TokenStream,
    texts: Sequence[str],
    start_offsets: Sequence[int],
    end_offsets: Sequence[int],
    position_increments: Sequence[int] | None = None,
) -> None:
    """Drain ``stream`` and compare every emitted token field by field."""
    tokens = list(stream)
    assert [token.text for token in tokens] == list(texts)
    assert [token.start_offset for token in tokens] == list(start_offsets)
    assert [token.end_offset for token in tokens] == list(end_offsets)
    if position_increments is not None:
        assert [token.position_increment for token in tokens] == list(
            position_increments
        )
    assert stream.advance() is False
