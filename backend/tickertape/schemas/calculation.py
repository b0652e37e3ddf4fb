"""Calculation Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CalculationCreate.expression: required string, stripped, non-empty
    - CalculationCreate.result: required number (int, float, or numeric string), finite
    - Booleans are never numbers, even though Python treats them as ints
    - Numeric strings are plain decimals (optional sign and exponent); "1_000", "nan", "0x1f" rejected
    - The arithmetic in expression is never checked against result

Design Decisions:
    - field_validator(mode="before") for type gates: Pydantic's lax mode would
      otherwise coerce values the ticker tape client never sends
    - CalculationResponse reads ORM attributes directly (from_attributes)
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Plain decimal with optional exponent: no underscores, no nan/inf, no hex
NUMERIC_STRING = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class CalculationCreate(BaseModel):
    """Calculation creation — client computes, server only stores."""
    expression: str
    result: float = Field(allow_inf_nan=False)

    @field_validator("expression", mode="before")
    @classmethod
    def require_string_expression(cls, v: object) -> object:
        if not isinstance(v, str):
            raise ValueError("expression must be a string")
        return v

    @field_validator("expression")
    @classmethod
    def strip_expression(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("expression cannot be empty or whitespace")
        return v

    @field_validator("result", mode="before")
    @classmethod
    def require_numeric_result(cls, v: object) -> object:
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            raise ValueError("result must be numeric")
        if isinstance(v, str):
            v = v.strip()
            if not NUMERIC_STRING.fullmatch(v):
                raise ValueError("result must be numeric")
        return v


class CalculationResponse(BaseModel):
    """Calculation response — one ticker tape entry."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    expression: str
    result: float
    created_at: datetime
    updated_at: datetime
