"""
Change feed over server-sent events

Each event tells the client that a collection changed; the client
re-fetches the whole collection.
"""

import json
import logging
from typing import AsyncIterator, Iterable, List, Optional

from app.core.redis_client import RedisClient

logger = logging.getLogger(__name__)

TABLES = (
    "categories",
    "items",
    "workout_logs",
    "transactions",
    "budgets",
    "savings_goals",
    "todos",
)


def parse_tables(raw: Optional[str]) -> List[str]:
    """
    Parse a comma-separated table list

    Empty input selects every table.

    Raises:
        ValueError: unknown table name
    """
    if not raw:
        return list(TABLES)

    tables = [name.strip() for name in raw.split(",") if name.strip()]
    unknown = [name for name in tables if name not in TABLES]
    if unknown:
        raise ValueError(f"Unknown tables: {', '.join(unknown)}")
    return tables or list(TABLES)


def format_event(data: dict, event: str = "change") -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


async def change_event_stream(redis: RedisClient, tables: Iterable[str]) -> AsyncIterator[str]:
    """Yield one server-sent event per change signal"""
    tables = list(tables)
    logger.info(f"Change feed opened for: {', '.join(tables)}")
    yield format_event({"tables": tables}, event="ready")
    try:
        async for signal in redis.listen(tables):
            yield format_event(signal)
    finally:
        logger.info("Change feed closed")
