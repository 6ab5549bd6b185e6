"""create bugs table

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "bugs",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("severity", sa.String(length=20), nullable=False, server_default="Medium"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Open"),
        sa.Column("priority", sa.String(length=20), nullable=False, server_default="Medium"),
        sa.Column("assigned_to", sa.Text(), nullable=False, server_default="Unassigned"),
        sa.Column("reported_by", sa.Text(), nullable=False),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::text[]"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "severity IN ('Low', 'Medium', 'High', 'Critical')",
            name="ck_bugs_severity_valid",
        ),
        sa.CheckConstraint(
            "status IN ('Open', 'In Progress', 'Resolved', 'Closed')",
            name="ck_bugs_status_valid",
        ),
        sa.CheckConstraint(
            "priority IN ('Low', 'Medium', 'High', 'Urgent')",
            name="ck_bugs_priority_valid",
        ),
    )

    op.create_index("idx_bugs_status_severity", "bugs", ["status", "severity"], unique=False)
    op.execute("CREATE INDEX idx_bugs_created_at_desc ON bugs (created_at DESC)")


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS idx_bugs_created_at_desc")
    op.drop_index("idx_bugs_status_severity", table_name="bugs")

    op.drop_table("bugs")
