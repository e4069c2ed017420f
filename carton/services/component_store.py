"""SQL Component Store — point reads and partial updates on the components table.

Invariants:
    - Only primary-key lookups, partial updates and deletes (no scans, no secondary indexes)
    - update_row() only touches the columns it is given
    - Updating a missing row raises ComponentNotFoundError
    - SQLAlchemy errors are rolled back and mapped to DatabaseError (map_db_error)

Design Decisions:
    - Commits per call: every mutator is a single durable write
"""

import logging
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carton.core.domain_types import ComponentId
from carton.core.errors import ComponentNotFoundError
from carton.infrastructure.database import map_db_error
from carton.models.component import ComponentRow

logger = logging.getLogger(__name__)

_UPDATABLE = frozenset({
    "name", "tosca_type", "inputs", "outputs", "envs", "repo", "artifacts",
    "related_components", "operations", "status", "state",
})


class SqlComponentStore:
    """ComponentStore backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_row(self, component_id: ComponentId) -> ComponentRow | None:
        try:
            result = await self.db.execute(
                select(ComponentRow)
                .where(ComponentRow.id == component_id)
                .execution_options(populate_existing=True),
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._rollback()
            raise map_db_error(e, "fetch", component_id) from e

    async def update_row(
        self, component_id: ComponentId, fields: dict[str, Any],
    ) -> None:
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Not updatable columns: {', '.join(sorted(unknown))}")
        try:
            result = await self.db.execute(
                update(ComponentRow)
                .where(ComponentRow.id == component_id)
                .values(**fields),
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._rollback()
            raise map_db_error(e, "update", component_id) from e
        if result.rowcount == 0:
            raise ComponentNotFoundError(component_id)

    async def delete_row(self, component_id: ComponentId) -> None:
        try:
            await self.db.execute(
                delete(ComponentRow).where(ComponentRow.id == component_id),
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._rollback()
            raise map_db_error(e, "delete", component_id) from e

    async def _rollback(self) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback failed: {e}")

