"""Redis client wrapper for projected hand records."""

from __future__ import annotations

import json
import os
import time
from typing import Optional

import redis.asyncio as redis

from handledger.records import HandProjection

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
HAND_TTL_SECONDS = int(os.getenv("HAND_TTL_SECONDS", "0"))  # 0 = keep forever

# Sorted set of hand ids scored by expiry time (+inf when kept forever).
HANDS_KEY = "hands"
QUARANTINE_KEY = "hands:quarantine"

_pool: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    global _pool
    if _pool is None:
        _pool = redis.from_url(REDIS_URL, decode_responses=True)
    return _pool


def _hand_key(hand_id: int) -> str:
    return f"hand:{hand_id}"


def _actions_key(hand_id: int) -> str:
    return f"hand:{hand_id}:actions"


def _blinds_key(hand_id: int) -> str:
    return f"hand:{hand_id}:blinds"


def _hole_cards_key(hand_id: int) -> str:
    return f"hand:{hand_id}:hole_cards"


def _record_keys(hand_id: int) -> list[str]:
    return [
        _hand_key(hand_id),
        _actions_key(hand_id),
        _blinds_key(hand_id),
        _hole_cards_key(hand_id),
    ]


async def store_projection(projection: HandProjection) -> None:
    """Write all four record sets for a hand in one transaction."""
    r = await get_redis()
    data = projection.model_dump(mode="json")
    hand_id = projection.hand.id
    ex = HAND_TTL_SECONDS or None
    expires_at = time.time() + ex if ex else float("inf")

    async with r.pipeline(transaction=True) as pipe:
        pipe.set(_hand_key(hand_id), json.dumps(data["hand"]), ex=ex)
        pipe.set(_actions_key(hand_id), json.dumps(data["actions"]), ex=ex)
        pipe.set(_blinds_key(hand_id), json.dumps(data["blinds"]), ex=ex)
        pipe.set(_hole_cards_key(hand_id), json.dumps(data["hole_cards"]), ex=ex)
        pipe.zadd(HANDS_KEY, {str(hand_id): expires_at})
        pipe.hdel(QUARANTINE_KEY, str(hand_id))
        await pipe.execute()


async def load_projection(hand_id: int) -> Optional[HandProjection]:
    r = await get_redis()
    raw_hand, raw_actions, raw_blinds, raw_hole = await r.mget(_record_keys(hand_id))
    if raw_hand is None:
        return None
    return HandProjection.model_validate(
        {
            "hand": json.loads(raw_hand),
            "actions": json.loads(raw_actions or "[]"),
            "blinds": json.loads(raw_blinds),
            "hole_cards": json.loads(raw_hole or "[]"),
        }
    )


async def list_hand_ids() -> list[int]:
    """Return the ids of all stored hands, ascending.

    Ids whose records have expired are pruned from the index first.
    """
    r = await get_redis()
    await r.zremrangebyscore(HANDS_KEY, "-inf", time.time())
    members = await r.zrange(HANDS_KEY, 0, -1)
    return sorted(int(m) for m in members)


async def delete_hand(hand_id: int) -> bool:
    """Remove a hand's records. Returns False if nothing was stored."""
    r = await get_redis()
    async with r.pipeline(transaction=True) as pipe:
        pipe.delete(*_record_keys(hand_id))
        pipe.zrem(HANDS_KEY, str(hand_id))
        pipe.hdel(QUARANTINE_KEY, str(hand_id))
        removed, _, _ = await pipe.execute()
    return removed > 0


async def quarantine_hand(hand_id: int, reason: str) -> None:
    r = await get_redis()
    await r.hset(QUARANTINE_KEY, str(hand_id), reason)


async def list_quarantined() -> dict[int, str]:
    r = await get_redis()
    raw = await r.hgetall(QUARANTINE_KEY)
    return {int(k): v for k, v in raw.items()}


async def close() -> None:
    global _pool
    if _pool is not None:
        await _pool.aclose()
        _pool = None
