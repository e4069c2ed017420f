"""Database Session Manager — async engine for the components table, plus SQLAlchemy error mapping.

Invariants:
    - Every session rolls back on any exception before it propagates
    - SQLAlchemy exceptions leave this layer as DatabaseError, tagged with the
      operation and (when known) the component id
    - Pool sizing applies to server databases only; SQLite uses its default pool

Design Decisions:
    - map_db_error() is shared with SqlComponentStore so a failure reads the same
      whether it surfaces from a store call or from the session itself
    - expire_on_commit=False: rows stay readable after the store commits
    - No retry here: fetch/update/delete are single attempts
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from carton.core.errors import DatabaseError, ErrorContext

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_DESCRIPTIONS: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "integrity constraint violated"),
    (OperationalError, "connection or operational error"),
    (DBAPIError, "driver error"),
)


def map_db_error(
    e: SQLAlchemyError, operation: str, component_id: str | None = None,
) -> DatabaseError:
    """Translate a SQLAlchemy exception into DatabaseError and log it once."""
    description = next(
        (desc for kind, desc in _DESCRIPTIONS if isinstance(e, kind)),
        "operation failed",
    )
    logger.error(
        f"Components {operation} failed ({description}): {e}",
        extra={"component_id": component_id, "error_code": "DATABASE_ERROR"},
    )
    return DatabaseError(
        description, operation, ErrorContext(component_id=component_id),
    )


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise map_db_error(e, "session") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (DatabaseError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
