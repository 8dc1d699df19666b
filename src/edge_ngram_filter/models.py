from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Token:
    """Represents a token, its inclusive-exclusive character offsets and its position gap."""

    text: str
    start_offset: int
    end_offset: int
    position_increment: int = 1
