"""event_stall_config

Revision ID: 8d4e0b6a5c12
Revises: 3f1c9a7e2b01
Create Date: 2026-10-19 00:02:00.000000

Adds stall configuration to events and the exhibitor scanned-visitors log.
Deployments created before this revision run without these columns; the
events module writes through the schema inspector and tolerates that.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "8d4e0b6a5c12"
down_revision: Union[str, None] = "3f1c9a7e2b01"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.add_column(
        "events",
        sa.Column("enable_stalls", sa.Boolean(), server_default=sa.false(), nullable=True),
    )
    op.add_column(
        "events",
        sa.Column(
            "stall_config",
            postgresql.JSONB(),
            server_default=sa.text("'{}'::jsonb"),
            nullable=True,
        ),
    )
    op.add_column(
        "events",
        sa.Column(
            "stall_types",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=True,
        ),
    )
    op.add_column("events", sa.Column("ground_layout_url", sa.Text(), nullable=True))

    op.create_table(
        "exhibitor_scanned_visitors",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exhibitor_id", sa.Integer(), nullable=True),
        sa.Column("event_id", sa.Integer(), nullable=True),
        sa.Column("visitor_id", sa.Integer(), nullable=True),
        sa.Column("scan_type", sa.String(length=20), nullable=False),
        sa.Column("visitor_name", sa.String(length=255), nullable=True),
        sa.Column("visitor_email", sa.String(length=255), nullable=True),
        sa.Column("visitor_phone", sa.String(length=50), nullable=True),
        sa.Column("visitor_company", sa.String(length=255), nullable=True),
        sa.Column("visitor_designation", sa.String(length=255), nullable=True),
        sa.Column("visitor_unique_code", sa.String(length=100), nullable=True),
        sa.Column("ocr_raw_text", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("lead_status", sa.String(length=50), server_default="New", nullable=True),
        sa.Column("interest_level", sa.String(length=50), nullable=True),
        sa.Column("follow_up_date", sa.Date(), nullable=True),
        sa.Column(
            "scanned_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
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
        sa.CheckConstraint(
            "scan_type IN ('QR_SCAN', 'OCR')",
            name="ck_scanned_visitors_scan_type",
        ),
        sa.ForeignKeyConstraint(["exhibitor_id"], ["exhibitors.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["visitor_id"], ["visitors.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_exhibitor_scanned_visitors_exhibitor_id",
        "exhibitor_scanned_visitors",
        ["exhibitor_id"],
    )
    op.create_index(
        "ix_exhibitor_scanned_visitors_event_id",
        "exhibitor_scanned_visitors",
        ["event_id"],
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("exhibitor_scanned_visitors")
    op.drop_column("events", "ground_layout_url")
    op.drop_column("events", "stall_types")
    op.drop_column("events", "stall_config")
    op.drop_column("events", "enable_stalls")
