"""FastAPI application — REST endpoints for projecting and storing hands."""

import hmac
import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from handledger import ledger, redis_client
from handledger.ledger import BatchResult
from handledger.models import Hand
from handledger.projector import StructuralViolation, project
from handledger.records import HandProjection

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await redis_client.close()


app = FastAPI(title="Hand Ledger API", lifespan=lifespan)

# ---------- Rate Limiting ----------

_rate_limit_enabled = os.getenv("RATE_LIMIT_ENABLED", "1") != "0"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=_rate_limit_enabled,
)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def _rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please slow down."},
    )


# ---------- Admin Auth ----------

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")


async def verify_admin(authorization: str | None = Header(None)):
    """Validate the admin password from the Authorization header."""
    if not ADMIN_PASSWORD:
        raise HTTPException(
            status_code=503,
            detail="Admin not configured. Set ADMIN_PASSWORD env var.",
        )
    expected = f"Bearer {ADMIN_PASSWORD}"
    if not authorization or not hmac.compare_digest(authorization, expected):
        raise HTTPException(status_code=401, detail="Invalid admin password")


# ---------- REST endpoints ----------


@app.post("/api/hands/project", response_model=HandProjection)
@limiter.limit("60/minute")
async def project_hand(request: Request, hand: Hand):
    """Project a hand into record sets without storing anything."""
    try:
        return project(hand)
    except StructuralViolation as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/hands", response_model=HandProjection)
@limiter.limit("60/minute")
async def record_hand(request: Request, hand: Hand):
    try:
        return await ledger.record_hand(hand)
    except StructuralViolation as e:
        logger.info("Rejected hand %d: %s", hand.id, e)
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/hands/batch", response_model=BatchResult)
@limiter.limit("10/minute")
async def record_batch(request: Request, hands: list[Hand]):
    """Store many hands; structurally broken ones are quarantined, not rejected."""
    return await ledger.record_batch(hands)


@app.get("/api/hands")
@limiter.limit("30/minute")
async def list_hands(request: Request):
    return {"hands": await ledger.list_hands()}


@app.get("/api/hands/quarantine")
@limiter.limit("30/minute")
async def list_quarantined(request: Request):
    quarantined = await ledger.list_quarantined()
    return {
        "hands": [
            {"id": hand_id, "reason": reason}
            for hand_id, reason in sorted(quarantined.items())
        ]
    }


@app.get("/api/hands/{hand_id}", response_model=HandProjection)
@limiter.limit("30/minute")
async def get_hand(request: Request, hand_id: int):
    projection = await ledger.get_hand(hand_id)
    if projection is None:
        raise HTTPException(status_code=404, detail="Hand not found")
    return projection


@app.delete("/api/hands/{hand_id}")
@limiter.limit("10/minute")
async def delete_hand(request: Request, hand_id: int, _=Depends(verify_admin)):
    if not await ledger.remove_hand(hand_id):
        raise HTTPException(status_code=404, detail="Hand not found")
    return {"ok": True}
