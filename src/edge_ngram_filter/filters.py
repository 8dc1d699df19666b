from __future__ import annotations

import unicodedata
from abc import abstractmethod

from .models import Token
from .tokenization import TokenStream

# Letters that NFKD leaves intact but that have a conventional ASCII spelling.
FOLDING_TABLE = {
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ß": "ss",
    "ẞ": "SS",
    "ø": "o",
    "Ø": "O",
    "đ": "d",
    "Đ": "D",
    "ð": "d",
    "Ð": "D",
    "þ": "th",
    "Þ": "TH",
    "ł": "l",
    "Ł": "L",
    "ı": "i",
}


def fold_to_ascii(value: str) -> str:
    """Fold accented and ligature characters to their closest ASCII spelling."""
    folded = "".join(FOLDING_TABLE.get(char, char) for char in value)
    decomposed = unicodedata.normalize("NFKD", folded)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


class TokenFilter(TokenStream):
    """A stream stage that rewrites each token pulled from ``source``."""

    def __init__(self, source: TokenStream) -> None:
        self.source = source
        self._current = None

    @abstractmethod
    def transform(self, token: Token) -> Token:
        raise NotImplementedError

    def advance(self) -> bool:
        if not self.source.advance():
            self._current = None
            return False
        self._current = self.transform(self.source.token)
        return True

    def reset(self) -> None:
        self._current = None


class LowercaseFilter(TokenFilter):
    def transform(self, token: Token) -> Token:
        return Token(
            text=token.text.lower(),
            start_offset=token.start_offset,
            end_offset=token.end_offset,
            position_increment=token.position_increment,
        )


class ASCIIFoldingFilter(TokenFilter):
    """
    Folds token text to ASCII while keeping the source offsets.

    Folding can lengthen a term ("æ" becomes "ae"), so the text may no longer
    match the width of its offset span.
    """

    def transform(self, token: Token) -> Token:
        return Token(
            text=fold_to_ascii(token.text),
            start_offset=token.start_offset,
            end_offset=token.end_offset,
            position_increment=token.position_increment,
        )
