"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Calculation is the only entity; no foreign keys

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from tickertape.models.calculation import Calculation  # noqa: F401
