"""Projection of a ``Hand`` into flat storage rows.

Every function here is pure: it reads the frozen hand and returns new
records. Nothing is cached or written back.
"""

from __future__ import annotations

from handledger.models import (
    Action,
    Bet,
    Call,
    Check,
    Fold,
    Hand,
    Leave,
    Raise,
    Street,
    UncalledBet,
)
from handledger.records import (
    ActionRecord,
    BlindKind,
    BlindRecord,
    HandProjection,
    HandRecord,
    HoleCardRecord,
)


class HandLedgerError(Exception):
    """Base class for errors raised by handledger."""


class StructuralViolation(HandLedgerError, ValueError):
    """A hand contradicts its own seat layout (hole cards on an empty seat)."""

    def __init__(self, hand_id: int, seat: int) -> None:
        self.hand_id = hand_id
        self.seat = seat
        super().__init__(
            f"Hand {hand_id}: hole cards recorded for empty seat {seat}"
        )


# ------------------------------------------------------------------
# Actions
# ------------------------------------------------------------------


def _action_record(action: Action, street: Street, sequence: int, hand_id: int) -> ActionRecord:
    amount1 = 0.0
    amount2 = 0.0
    allin = False

    if isinstance(action, (Call, Bet)):
        amount1 = action.amount
        allin = action.is_all_in
    elif isinstance(action, Raise):
        amount1 = action.from_amount
        amount2 = action.to_amount
        allin = action.is_all_in
    elif isinstance(action, UncalledBet):
        amount1 = action.amount
    elif not isinstance(action, (Check, Fold, Leave)):
        raise TypeError(f"Unknown action type: {type(action).__name__}")

    return ActionRecord(
        player=action.player.name,
        hand=hand_id,
        kind=action.kind,
        moment=street.value,
        sequence=sequence,
        amount1=amount1,
        amount2=amount2,
        allin=allin,
    )


def project_actions(hand: Hand) -> list[ActionRecord]:
    """Flatten all four streets into one action log.

    Sequence numbers run 0..n-1 across the whole hand; they are not reset
    when the street changes.
    """
    records: list[ActionRecord] = []
    for street, actions in hand.streets():
        for action in actions:
            records.append(_action_record(action, street, len(records), hand.id))
    return records


# ------------------------------------------------------------------
# Hand summary
# ------------------------------------------------------------------


def project_hand(hand: Hand) -> HandRecord:
    names = [p.name if p is not None else "" for p in hand.players]
    cards = hand.board()
    return HandRecord(
        id=hand.id,
        content=hand.content,
        real_money=hand.real_money,
        time=int(hand.date.timestamp()),
        table_name=hand.table_name,
        table_size=int(hand.table_size),
        winner=hand.end.winner.name,
        pot=hand.end.pot,
        **{f"player{i + 1}": name for i, name in enumerate(names)},
        **{f"card{i + 1}": card for i, card in enumerate(cards)},
    )


# ------------------------------------------------------------------
# Blinds
# ------------------------------------------------------------------


def project_blinds(hand: Hand) -> tuple[BlindRecord, BlindRecord]:
    """Small and big blind rows. Seat occupancy is not checked here."""
    small = BlindRecord(
        player=hand.small_blind.player.name,
        hand=hand.id,
        amount=hand.small_blind.amount,
        kind=BlindKind.SMALL,
    )
    big = BlindRecord(
        player=hand.big_blind.player.name,
        hand=hand.id,
        amount=hand.big_blind.amount,
        kind=BlindKind.BIG,
    )
    return small, big


def unseated_blinds(hand: Hand) -> list[BlindKind]:
    """Blind postings whose player is not sitting at the table."""
    seated_names = {player.name for _, player in hand.seated()}
    missing: list[BlindKind] = []
    if hand.small_blind.player.name not in seated_names:
        missing.append(BlindKind.SMALL)
    if hand.big_blind.player.name not in seated_names:
        missing.append(BlindKind.BIG)
    return missing


# ------------------------------------------------------------------
# Hole cards
# ------------------------------------------------------------------


def project_hole_cards(hand: Hand) -> list[HoleCardRecord]:
    """One row per dealt/shown hole-card pair, in seat order.

    Raises StructuralViolation if a pair sits on an empty seat.
    """
    records: list[HoleCardRecord] = []
    for seat, cards in enumerate(hand.players_card):
        if cards is None:
            continue
        player = hand.players[seat]
        if player is None:
            raise StructuralViolation(hand.id, seat)
        records.append(
            HoleCardRecord(
                hand=hand.id,
                player=player.name,
                card1=cards[0],
                card2=cards[1],
            )
        )
    return records


def project(hand: Hand) -> HandProjection:
    """Run every projector; fails as a whole if any one of them fails."""
    return HandProjection(
        hand=project_hand(hand),
        actions=project_actions(hand),
        blinds=project_blinds(hand),
        hole_cards=project_hole_cards(hand),
    )
