"""Flat storage rows derived from a ``Hand``.

Each row maps one-to-one onto a table column set, joined on the hand id:

    action      player TEXT, hand BIGINT, kind TEXT, moment TEXT,
                sequence INT, amount1 REAL, amount2 REAL, allin BOOL
    hand        id BIGINT, content TEXT, real_money BOOL, time BIGINT,
                table_name TEXT, table_size INT, winner TEXT, pot REAL,
                player1..player9 TEXT, card1..card5 TEXT
    blind       player TEXT, hand BIGINT, amount REAL, kind TEXT
    hole_card   hand BIGINT, player TEXT, card1 TEXT, card2 TEXT

REAL columns are 32-bit floats in the store.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BlindKind(str, Enum):
    SMALL = "small"
    BIG = "big"


class ActionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: str
    hand: int
    kind: str
    moment: str
    sequence: int
    amount1: float = 0.0
    amount2: float = 0.0
    allin: bool = False


class HandRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    content: str
    real_money: bool
    time: int  # epoch seconds
    table_name: str
    table_size: int
    winner: str
    pot: float
    player1: str
    player2: str
    player3: str
    player4: str
    player5: str
    player6: str
    player7: str
    player8: str
    player9: str
    card1: str
    card2: str
    card3: str
    card4: str
    card5: str


class BlindRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: str
    hand: int
    amount: float
    kind: BlindKind


class HoleCardRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    hand: int
    player: str
    card1: str
    card2: str


class HandProjection(BaseModel):
    """All four record sets for one hand."""

    model_config = ConfigDict(frozen=True)

    hand: HandRecord
    actions: list[ActionRecord]
    blinds: tuple[BlindRecord, BlindRecord]
    hole_cards: list[HoleCardRecord]
