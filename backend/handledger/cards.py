"""Card labels as they appear in hand histories ("Ah", "Tc", "2d")."""

from __future__ import annotations

from enum import IntEnum, Enum


class Suit(str, Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


RANK_SYMBOLS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

_SYMBOL_RANKS = {v: k for k, v in RANK_SYMBOLS.items()}


def parse_label(label: str) -> tuple[Rank, Suit]:
    """Split a label like 'Ah' into (rank, suit).

    Raises ValueError for anything that is not a rank symbol followed by
    a suit letter.
    """
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label!r}")
    rank = _SYMBOL_RANKS.get(label[0].upper())
    if rank is None:
        raise ValueError(f"Invalid card rank in {label!r}")
    try:
        suit = Suit(label[1].lower())
    except ValueError:
        raise ValueError(f"Invalid card suit in {label!r}") from None
    return rank, suit


def check_label(label: str) -> str:
    """Return the label unchanged if it parses; hand histories keep their spelling."""
    parse_label(label)
    return label
