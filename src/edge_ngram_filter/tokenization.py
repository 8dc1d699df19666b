from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable, Iterator

from .models import Token

WHITESPACE_TOKEN_PATTERN = re.compile(r"\S+")


class TokenStream(ABC):
    """
    Pull-based producer of tokens.

    ``advance`` moves to the next token and reports whether one is available;
    ``token`` then holds it until the following ``advance`` call.
    """

    _current: Token | None = None

    @abstractmethod
    def advance(self) -> bool:
        """Move to the next token, returning False once the stream is exhausted."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Rewind the stream so that its token sequence can be consumed again."""
        raise NotImplementedError

    @property
    def token(self) -> Token:
        """The current token; only valid after ``advance`` returned True."""
        if self._current is None:
            raise RuntimeError("No current token; call advance() first.")
        return self._current

    def next_token(self) -> Token | None:
        """Advance and return the new current token, or None at end of stream."""
        if self.advance():
            return self.token
        return None

    def __iter__(self) -> Iterator[Token]:
        while self.advance():
            yield self.token


class Tokenizer(TokenStream):
    """A stream that produces tokens from text attached with ``set_text``."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self.reset()

    def set_text(self, text: str) -> None:
        """Attach new input and rewind."""
        self._text = text
        self.reset()


class WhitespaceTokenizer(Tokenizer):
    """Splits text on runs of whitespace; every token has position increment 1."""

    _matches: Iterator[re.Match[str]]

    def advance(self) -> bool:
        match = next(self._matches, None)
        if match is None:
            self._current = None
            return False
        self._current = Token(
            text=match.group(),
            start_offset=match.start(),
            end_offset=match.end(),
        )
        return True

    def reset(self) -> None:
        self._matches = WHITESPACE_TOKEN_PATTERN.finditer(self._text)
        self._current = None


class KeywordTokenizer(Tokenizer):
    """Emits the entire input as a single token, even when the input is empty."""

    def advance(self) -> bool:
        if self._done:
            self._current = None
            return False
        self._done = True
        self._current = Token(text=self._text, start_offset=0, end_offset=len(self._text))
        return True

    def reset(self) -> None:
        self._done = False
        self._current = None


class ListTokenSource(TokenStream):
    """Replays a fixed sequence of tokens."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._index = 0

    def advance(self) -> bool:
        if self._index >= len(self._tokens):
            self._current = None
            return False
        self._current = self._tokens[self._index]
        self._index += 1
        return True

    def reset(self) -> None:
        self._index = 0
        self._current = None
