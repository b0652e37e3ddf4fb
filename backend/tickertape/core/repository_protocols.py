"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do IO against the database
"""

from datetime import datetime
from typing import Protocol

from tickertape.core.domain_types import CalculationId


class CalculationLike(Protocol):
    """Structural contract for calculation records returned by a store.

    Avoids coupling routes and tests to the ORM model.
    """
    id: int
    expression: str
    result: float
    created_at: datetime
    updated_at: datetime


class CalculationStore(Protocol):
    """Contract for calculation persistence — implemented by shell."""
    async def create(self, expression: str, result: float) -> CalculationLike: ...
    async def list_all(self) -> list[CalculationLike]: ...
    async def delete_by_id(self, calculation_id: CalculationId) -> bool: ...
    async def delete_all(self) -> None: ...
