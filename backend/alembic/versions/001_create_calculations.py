"""Create calculations table.

Revision ID: 001_calculations
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_calculations"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "calculations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("expression", sa.Text, nullable=False),
        sa.Column("result", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_calculations_created_at", "calculations", ["created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_calculations_created_at", table_name="calculations")
    op.drop_table("calculations")
