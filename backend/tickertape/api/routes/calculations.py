"""Calculations — list, create, delete-one and clear-all for the ticker tape.

Invariants:
    - Payloads validated by CalculationCreate before reaching the repository
    - GET returns every record newest first (no pagination, no cache)
    - DELETE /{id} on an unknown id returns 404; the repository itself is tolerant
    - Ids outside the column range are unknown by definition: 404 without a query
    - DELETE (collection) truncates in one statement and returns 204

Design Decisions:
    - Repository injected via Depends(get_calculation_repository): tests override get_db
    - Enforcing existence on delete-one mirrors route-model binding in the original UI
      backend, so the front-end can distinguish stale rows from successful deletes
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tickertape.infrastructure.database import get_db
from tickertape.schemas.calculation import CalculationCreate, CalculationResponse
from tickertape.services.calculation_repository import CalculationRepository
from tickertape.core.domain_types import CalculationId, is_storable_calculation_id
from tickertape.core.repository_protocols import CalculationStore
from tickertape.core.errors import ErrorContext, ResourceNotFoundError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/calculations", tags=["calculations"])


def get_calculation_repository(
    db: AsyncSession = Depends(get_db),
) -> CalculationStore:
    return CalculationRepository(db)


@router.get("", response_model=list[CalculationResponse])
async def list_calculations(
    repo: CalculationStore = Depends(get_calculation_repository),
):
    """All calculations, newest first."""
    calculations = await repo.list_all()
    logger.debug("Listed calculations", extra={"count": len(calculations)})
    return calculations


@router.post(
    "", response_model=CalculationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_calculation(
    body: CalculationCreate,
    repo: CalculationStore = Depends(get_calculation_repository),
):
    """Store an expression/result pair computed by the client."""
    return await repo.create(body.expression, body.result)


@router.delete(
    "/{calculation_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_calculation(
    calculation_id: int,
    repo: CalculationStore = Depends(get_calculation_repository),
):
    """Delete one calculation by id."""
    deleted = (
        is_storable_calculation_id(calculation_id)
        and await repo.delete_by_id(CalculationId(calculation_id))
    )
    if not deleted:
        raise ResourceNotFoundError(
            "Calculation", str(calculation_id),
            ErrorContext(calculation_id=calculation_id),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_all_calculations(
    repo: CalculationStore = Depends(get_calculation_repository),
):
    """Clear the ticker tape."""
    await repo.delete_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
