"""create user_prototypes table

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_prototypes",
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("traits", sa.JSON(), nullable=False),
        sa.Column("archetype_blend", sa.JSON(), nullable=False),
        sa.Column("voice_profile", sa.JSON(), nullable=False),
        sa.Column("selected_value_ids", sa.JSON(), nullable=False),
        sa.Column("selected_inspiration_ids", sa.JSON(), nullable=False),
        sa.Column("future_self", sa.Text(), nullable=True),
        sa.Column("primary_archetype", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_user_prototypes")),
    )
    op.create_index(
        op.f("ix_user_prototypes_primary_archetype"),
        "user_prototypes",
        ["primary_archetype"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_user_prototypes_primary_archetype"), table_name="user_prototypes")
    op.drop_table("user_prototypes")
