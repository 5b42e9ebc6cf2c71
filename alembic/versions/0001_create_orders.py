"""create orders table

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("uid", sa.String(length=128), primary_key=True),
        sa.Column("json_data", sa.LargeBinary(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("orders")
