"""Create lookup checks

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "1a2b3c4d5e6f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "lookup_checks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_code", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("zone_id", sa.String(length=64), nullable=True),
        sa.Column("outcome", sa.String(length=32), nullable=False),
        sa.Column("ign", sa.String(length=255), nullable=True),
        sa.Column("status_code", sa.Integer(), nullable=False),
        sa.Column("duration_ms", sa.Integer(), nullable=False),
        sa.Column("client_ip", sa.String(length=64), nullable=True),
        sa.Column("request_id", sa.String(length=64), nullable=True),
        sa.Column(
            "checked_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_lookup_checks_checked_at",
        "lookup_checks",
        ["checked_at"],
        unique=False,
    )
    op.create_index(
        "ix_lookup_checks_game_checked_at",
        "lookup_checks",
        ["game_code", "checked_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_lookup_checks_game_checked_at", table_name="lookup_checks")
    op.drop_index("ix_lookup_checks_checked_at", table_name="lookup_checks")
    op.drop_table("lookup_checks")
