# Purpose: Server-sent change streams. One refresh event per burst of row changes.

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from app.api.deps import get_stream_user
from app.core.config import settings
from app.models.profile import Profile
from app.services.common.sse import format_event
from app.services.realtime.change_feed import change_feed, ThrottledSignal, TABLES

logger = logging.getLogger("realtime.api")

router = APIRouter(prefix="/realtime", tags=["realtime"])

KEEPALIVE_SECONDS = 15.0


def row_filter_for(table: str, user_id: str):
    if table == "messages":
        return lambda row: user_id in (row.get("from_user"), row.get("to_user"))
    if table == "notifications":
        return lambda row: row.get("user_id") == user_id
    return None


@router.get("/{table}")
async def stream_changes(table: str, request: Request, user: Profile = Depends(get_stream_user)):
    if table not in TABLES:
        raise HTTPException(status_code=404, detail="Unknown channel")
    row_filter = row_filter_for(table, str(user.id))

    async def events():
        sub = change_feed.subscribe(table, row_filter)
        signal = ThrottledSignal(sub, settings.REALTIME_THROTTLE_SECONDS)
        logger.debug("User %s listening on %s", user.id, table)
        try:
            yield format_event({"table": table}, event="ready")
            while not await request.is_disconnected():
                try:
                    batch = await signal.next_refresh(timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield format_event(
                    {"table": table, "count": len(batch), "events": sorted({e.event for e in batch})},
                    event="refresh",
                )
        finally:
            sub.close()

    return StreamingResponse(events(), media_type="text/event-stream", headers={"Cache-Control": "no-cache"})
