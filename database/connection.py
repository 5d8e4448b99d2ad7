import asyncpg
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class DatabasePool:
    """Manages the asyncpg connection pool lifecycle."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: str = None,
        *,
        host: str = "localhost",
        port: int = 5432,
        database: str = "golf_games",
        user: str = "postgres",
        password: str = "",
        min_size: int = 2,
        max_size: int = 10,
    ) -> None:
        """Create the connection pool. Call once at app startup."""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            host=None if dsn else host,
            port=None if dsn else port,
            database=None if dsn else database,
            user=None if dsn else user,
            password=None if dsn else password,
            min_size=min_size,
            max_size=max_size,
        )
        logger.info("Database pool ready (min=%d, max=%d)", min_size, max_size)

    async def close(self) -> None:
        """Close all connections. Call at app shutdown."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        """Get the pool, raising if not initialized."""
        if self._pool is None:
            raise RuntimeError(
                "Database pool not initialized. Call await db.initialize() first."
            )
        return self._pool

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    async def health_check(self) -> bool:
        """Test connectivity with SELECT 1."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.warning("Database health check failed: %s", e)
            return False


# Module-level singleton for convenience
db = DatabasePool()
