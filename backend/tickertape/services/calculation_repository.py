"""Calculation Repository — create, list, delete-one and delete-all for ticker tape entries.

Invariants:
    - Every operation is a single statement followed by commit
    - list_all orders by created_at DESC, id DESC (newest first, stable on ties)
    - delete_by_id is tolerant: missing rows return False, never raise
    - delete_all never deletes row-by-row and fires no per-row ORM events
    - All SQLAlchemy failures surface as DatabaseError after rollback

Design Decisions:
    - TRUNCATE on PostgreSQL, bulk DELETE elsewhere: SQLite has no TRUNCATE,
      and both leave the id sequence untouched so ids are never reused
    - Returns ORM instances: routes serialize through CalculationResponse
"""

import logging

from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from tickertape.core.domain_types import CalculationId
from tickertape.infrastructure.database import guard_db_errors
from tickertape.models.calculation import Calculation

logger = logging.getLogger(__name__)


class CalculationRepository:
    """SQLAlchemy implementation of the CalculationStore protocol."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, expression: str, result: float) -> Calculation:
        """Insert a calculation and return it with id and timestamps."""
        calculation = Calculation(expression=expression, result=result)
        async with guard_db_errors(self.db):
            self.db.add(calculation)
            await self.db.commit()
            await self.db.refresh(calculation)
        logger.info(
            "Calculation stored",
            extra={"calculation_id": calculation.id},
        )
        return calculation

    async def list_all(self) -> list[Calculation]:
        """All calculations, newest first. No pagination."""
        async with guard_db_errors(self.db):
            result = await self.db.execute(
                select(Calculation).order_by(
                    Calculation.created_at.desc(), Calculation.id.desc(),
                ),
            )
            return list(result.scalars().all())

    async def delete_by_id(self, calculation_id: CalculationId) -> bool:
        """Delete one calculation. Returns False if it did not exist."""
        async with guard_db_errors(self.db):
            result = await self.db.execute(
                delete(Calculation).where(Calculation.id == calculation_id),
            )
            await self.db.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(
                "Calculation deleted",
                extra={"calculation_id": calculation_id},
            )
        return deleted

    async def delete_all(self) -> None:
        """Remove every calculation in one statement."""
        async with guard_db_errors(self.db):
            conn = await self.db.connection()
            if conn.dialect.name == "postgresql":
                await self.db.execute(
                    text(f"TRUNCATE TABLE {Calculation.__tablename__}"),
                )
            else:
                await self.db.execute(delete(Calculation))
            await self.db.commit()
        logger.info("All calculations cleared")
