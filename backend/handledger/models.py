"""Pydantic models for a single parsed poker hand.

The parser upstream builds a fully populated ``Hand``; everything here is
frozen so projections can read it without copying.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import AfterValidator, AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from handledger.cards import check_label

SEAT_COUNT = 9

CardLabel = Annotated[str, AfterValidator(check_label)]
HoleCards = tuple[CardLabel, CardLabel]


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


class Player(BaseModel):
    """A player occupying a seat at the start of the hand."""

    model_config = ConfigDict(frozen=True)

    name: str
    position: int = Field(default=0, ge=0)
    bank: float = Field(default=0.0, ge=0)


class Blind(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: Player
    amount: float = Field(..., ge=0)


class End(BaseModel):
    """Showdown summary. Only winner name and pot reach the hand record."""

    model_config = ConfigDict(frozen=True)

    pot: float = Field(default=0.0, ge=0)
    winner: Player = Field(default_factory=lambda: Player(name=""))


# --- Actions ---


class _ActionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: Player


class Call(_ActionBase):
    kind: Literal["call"] = "call"
    amount: float = Field(..., ge=0)
    is_all_in: bool = False


class Bet(_ActionBase):
    kind: Literal["bet"] = "bet"
    amount: float = Field(..., ge=0)
    is_all_in: bool = False


class Raise(_ActionBase):
    kind: Literal["raise"] = "raise"
    from_amount: float = Field(..., ge=0)
    to_amount: float = Field(..., ge=0)
    is_all_in: bool = False


class Check(_ActionBase):
    kind: Literal["check"] = "check"


class Fold(_ActionBase):
    kind: Literal["fold"] = "fold"


class Leave(_ActionBase):
    kind: Literal["leave"] = "leave"


class UncalledBet(_ActionBase):
    kind: Literal["uncalled_bet"] = "uncalled_bet"
    amount: float = Field(..., ge=0)


Action = Annotated[
    Union[Call, Bet, Raise, Check, Fold, Leave, UncalledBet],
    Field(discriminator="kind"),
]


# --- Hand aggregate ---


class Hand(BaseModel):
    """One complete hand, from blinds to showdown or early end."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, lt=2**63)
    content: str = ""
    real_money: bool = False
    date: AwareDatetime
    small_limit: float = Field(default=0.0, ge=0)
    big_limit: float = Field(default=0.0, ge=0)
    table_name: str = ""
    table_size: int = Field(default=SEAT_COUNT, ge=1, le=SEAT_COUNT)
    button_position: int = Field(default=0, ge=0, lt=SEAT_COUNT)

    # Indexed by seat number 0-8; None is an empty seat / no cards shown.
    players: tuple[Optional[Player], ...] = (None,) * SEAT_COUNT
    players_card: tuple[Optional[HoleCards], ...] = (None,) * SEAT_COUNT

    small_blind: Blind
    big_blind: Blind
    end: End = Field(default_factory=End)

    preflop: tuple[Action, ...] = ()
    flop: tuple[Action, ...] = ()
    turn: tuple[Action, ...] = ()
    river: tuple[Action, ...] = ()

    flop_card: Optional[tuple[CardLabel, CardLabel, CardLabel]] = None
    turn_card: Optional[CardLabel] = None
    river_card: Optional[CardLabel] = None

    @field_validator("players", "players_card")
    @classmethod
    def _nine_slots(cls, v: tuple) -> tuple:
        if len(v) != SEAT_COUNT:
            raise ValueError(f"expected {SEAT_COUNT} seat slots, got {len(v)}")
        return v

    def streets(self) -> Iterator[tuple[Street, tuple[Action, ...]]]:
        """Yield each street with its actions, in play order."""
        yield Street.PREFLOP, self.preflop
        yield Street.FLOP, self.flop
        yield Street.TURN, self.turn
        yield Street.RIVER, self.river

    def seated(self) -> Iterator[tuple[int, Player]]:
        """Yield (seat index, player) for every occupied seat."""
        for seat, player in enumerate(self.players):
            if player is not None:
                yield seat, player

    def board(self) -> tuple[str, str, str, str, str]:
        """Five board labels, flop first; absent cards are empty strings."""
        flop = self.flop_card or ("", "", "")
        return (
            flop[0],
            flop[1],
            flop[2],
            self.turn_card or "",
            self.river_card or "",
        )

    @property
    def action_count(self) -> int:
        return len(self.preflop) + len(self.flop) + len(self.turn) + len(self.river)
