from __future__ import annotations

from enum import Enum
from typing import Tuple

from .models import Token
from .tokenization import TokenStream

FILTER_NAME = "edge_ngram_2"
FILTER_NAMES = (FILTER_NAME, "edgeNGram2")

DEFAULT_MIN_GRAM_SIZE = 1
DEFAULT_MAX_GRAM_SIZE = 1
DEFAULT_PRESERVE_POSITIONS = False


class ConfigurationError(ValueError):
    """Raised when a filter is built from invalid settings."""


class Side(Enum):
    """Edge of the input token that n-grams are taken from."""

    FRONT = "front"
    BACK = "back"

    @property
    def label(self) -> str:
        return self.value


DEFAULT_SIDE = Side.FRONT


class FilterState(Enum):
    """Lifecycle of an edge n-gram filter between construction and exhaustion."""

    EMPTY = "empty"
    EMITTING = "emitting"
    DONE = "done"


def side_from_label(label: str | None) -> Side | None:
    """Return the Side matching ``label`` exactly, or None when it is unknown."""
    if label == Side.FRONT.label:
        return Side.FRONT
    if label == Side.BACK.label:
        return Side.BACK
    return None


def gram_bounds(side: Side, length: int, gram_size: int) -> Tuple[int, int]:
    """Return the (start, end) slice of a ``gram_size`` gram within a term of ``length``."""
    start = 0 if side is Side.FRONT else length - gram_size
    return start, start + gram_size


class EdgeNGramTokenFilter(TokenStream):
    """
    Emits n-grams anchored at the front or back edge of every source token.

    Grams of one source token are emitted in increasing size, from ``min_gram``
    up to ``max_gram`` or the token length, whichever is smaller. Tokens shorter
    than ``min_gram`` produce nothing.

    With ``preserve_positions`` the first gram of each source token carries the
    token's own position increment plus the increments of any skipped tokens
    before it, and the remaining grams are stacked on the same position
    (increment 0). Without it every gram takes a fresh position.

    Offsets are the source token's start offset plus the gram's slice bounds.
    They are not clamped to the source token's end offset, so a term that an
    upstream filter lengthened can yield offsets past the original input.
    """

    def __init__(
        self,
        source: TokenStream,
        side: Side | str | None,
        min_gram: int,
        max_gram: int,
        preserve_positions: bool = DEFAULT_PRESERVE_POSITIONS,
    ) -> None:
        if isinstance(side, str):
            side = side_from_label(side)
        if side is None:
            raise ConfigurationError("side must be either front or back")
        if min_gram < 1:
            raise ConfigurationError("min_gram must be greater than zero")
        if min_gram > max_gram:
            raise ConfigurationError("min_gram must not be greater than max_gram")

        self.source = source
        self.side = side
        self.min_gram = min_gram
        self.max_gram = max_gram
        self.preserve_positions = preserve_positions
        self._current = None
        self._exhausted = False
        self._clear_state()

    def _clear_state(self) -> None:
        self._term: str | None = None
        self._term_length = 0
        self._gram_size = self.min_gram
        self._token_start = 0
        self._pos_incr = 0
        self._accum_pos_incr = 0

    @property
    def state(self) -> FilterState:
        """EMITTING only while the buffered token still has a gram left to emit."""
        if self._term is not None and self._gram_size <= min(
            self.max_gram, self._term_length
        ):
            return FilterState.EMITTING
        if self._exhausted:
            return FilterState.DONE
        return FilterState.EMPTY

    def advance(self) -> bool:
        """Emit the next gram, pulling source tokens as needed; False at end of stream."""
        while True:
            if self._term is None:
                if self._exhausted or not self.source.advance():
                    self._exhausted = True
                    self._current = None
                    return False
                source_token = self.source.token
                self._term = source_token.text
                self._term_length = len(source_token.text)
                self._gram_size = self.min_gram
                self._token_start = source_token.start_offset
                # Without preserve_positions every gram gets a new position.
                self._pos_incr = (
                    source_token.position_increment if self.preserve_positions else 1
                )

            if self.min_gram <= self._gram_size <= self.max_gram and (
                self._gram_size <= self._term_length
            ):
                start, end = gram_bounds(self.side, self._term_length, self._gram_size)
                self._current = Token(
                    text=self._term[start:end],
                    start_offset=self._token_start + start,
                    end_offset=self._token_start + end,
                    position_increment=self._pos_incr + self._accum_pos_incr,
                )
                self._accum_pos_incr = 0
                if self.preserve_positions:
                    # Stack the remaining grams on this token's position.
                    self._pos_incr = 0
                self._gram_size += 1
                return True

            if self.preserve_positions:
                # Carry the gap of a token that yielded no (more) grams.
                self._accum_pos_incr += self._pos_incr
            self._term = None

    def reset(self) -> None:
        """Drop any buffered token and pending position gap; the source is not reset."""
        self._clear_state()
        self._exhausted = False
        self._current = None
