"""create apartments table

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2025-11-07 14:03:00.000000
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema: apartments with case-insensitive (project, unit) uniqueness."""
    op.create_table(
        "apartments",
        sa.Column("id", sa.Text(), primary_key=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("unit_number", sa.Text(), nullable=False),
        sa.Column("project", sa.Text(), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("area", sa.Float(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.Text(), nullable=False),
        sa.Column("country", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "images",
            postgresql.ARRAY(sa.Text()),
            server_default=sa.text("ARRAY[]::text[]"),
            nullable=False,
        ),
        sa.Column(
            "amenities",
            postgresql.ARRAY(sa.Text()),
            server_default=sa.text("ARRAY[]::text[]"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("price >= 0", name="ck_apartments_price_nonneg"),
        sa.CheckConstraint("area > 0", name="ck_apartments_area_pos"),
        sa.CheckConstraint("bedrooms >= 0 AND bathrooms >= 0", name="ck_apartments_rooms_nonneg"),
    )

    op.create_index("ix_apartments_project", "apartments", ["project"])
    op.create_index(
        "ix_apartments_created_at_id",
        "apartments",
        [sa.text("created_at DESC"), sa.text("id DESC")],
    )
    # check-then-insert in the service is not atomic; the engine enforces it
    op.create_index(
        "uq_apartments_project_unit_ci",
        "apartments",
        [sa.text("lower(project)"), sa.text("lower(unit_number)")],
        unique=True,
    )


def downgrade() -> None:
    """Downgrade schema: drop apartments."""
    op.drop_index("uq_apartments_project_unit_ci", table_name="apartments")
    op.drop_index("ix_apartments_created_at_id", table_name="apartments")
    op.drop_index("ix_apartments_project", table_name="apartments")
    op.drop_table("apartments")
