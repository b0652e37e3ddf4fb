"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CalculationId wraps the store-assigned integer primary key
    - Ids are monotonic and never reused, so they double as a creation-order tiebreaker

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CalculationId = NewType("CalculationId", int)


# Store-assigned ids live in a signed 32-bit column (PostgreSQL INTEGER)
MAX_CALCULATION_ID = 2**31 - 1


def is_storable_calculation_id(value: int) -> bool:
    """Whether value could ever have been assigned by the store."""
    return 1 <= value <= MAX_CALCULATION_ID
