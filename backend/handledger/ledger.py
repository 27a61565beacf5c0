"""Ledger — projects parsed hands and hands the rows to storage."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from handledger import redis_client
from handledger.models import Hand
from handledger.projector import StructuralViolation, project, unseated_blinds
from handledger.records import HandProjection

logger = logging.getLogger(__name__)


class BatchResult(BaseModel):
    stored: list[int] = Field(default_factory=list)
    quarantined: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)


async def record_hand(hand: Hand) -> HandProjection:
    """Project a hand and store its records.

    StructuralViolation propagates; nothing is written for that hand.
    """
    projection = project(hand)

    # Accepted as-is; the store keeps the row even when the seat is empty.
    missing = unseated_blinds(hand)
    for blind in projection.blinds:
        if blind.kind in missing:
            logger.warning(
                "Hand %d: %s blind posted by unseated player %r",
                hand.id,
                blind.kind.value,
                blind.player,
            )

    await redis_client.store_projection(projection)
    logger.info(
        "Stored hand %d: %d actions, %d hole card rows",
        hand.id,
        len(projection.actions),
        len(projection.hole_cards),
    )
    return projection


async def record_batch(hands: Iterable[Hand]) -> BatchResult:
    """Record many hands, quarantining those that fail structurally.

    Any other error (e.g. Redis unavailable) is logged and the hand is
    reported under ``failed``; the rest of the batch still runs.
    """
    result = BatchResult()
    for hand in hands:
        try:
            await record_hand(hand)
        except StructuralViolation as e:
            logger.warning("Quarantining hand %d: %s", hand.id, e)
            await redis_client.quarantine_hand(hand.id, str(e))
            result.quarantined.append(hand.id)
        except Exception:
            logger.exception("Failed to record hand %d", hand.id)
            result.failed.append(hand.id)
        else:
            result.stored.append(hand.id)
    return result


async def get_hand(hand_id: int) -> Optional[HandProjection]:
    return await redis_client.load_projection(hand_id)


async def remove_hand(hand_id: int) -> bool:
    removed = await redis_client.delete_hand(hand_id)
    if removed:
        logger.info("Deleted hand %d", hand_id)
    return removed


async def list_hands() -> list[int]:
    return await redis_client.list_hand_ids()


async def list_quarantined() -> dict[int, str]:
    return await redis_client.list_quarantined()
