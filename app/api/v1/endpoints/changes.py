"""
Change feed API endpoint
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from app.core.redis_client import RedisClient, get_redis
from app.services.change_feed import change_event_stream, parse_tables

router = APIRouter()


@router.get("/")
async def stream_changes(
    tables: Optional[str] = Query(None, description="Comma-separated tables, all if omitted"),
    redis: RedisClient = Depends(get_redis),
):
    """
    Server-sent events announcing that a collection changed

    Clients re-fetch the named collection on every `change` event.
    """
    try:
        selected = parse_tables(tables)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return StreamingResponse(
        change_event_stream(redis, selected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
