"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on ASGI startup and closes it on shutdown."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=True)
        logger.info("Database pool opened (min=%d, max=%d)", self._pool.min_size, self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool closed")
