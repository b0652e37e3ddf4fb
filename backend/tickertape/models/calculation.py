"""Calculation ORM — persists one expression/result pair shown on the ticker tape.

Invariants:
    - id is an auto-assigned integer primary key, never reused after deletion
    - expression is non-nullable text, result is a non-nullable float
    - created_at/updated_at set on insert; rows are never updated in practice

Design Decisions:
    - sqlite_autoincrement: SQLite would otherwise recycle the highest rowid after
      a delete; PostgreSQL sequences never go backwards unless explicitly restarted
    - Float over Numeric: results round-trip to JSON numbers without a custom encoder
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from tickertape.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Calculation(Base):
    """Calculation record — one line of the ticker tape."""
    __tablename__ = "calculations"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    expression: Mapped[str] = mapped_column(Text, nullable=False)
    result: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Calculation id={self.id} expression={self.expression!r}>"
