"""Users, challenge submissions, and dashboard progress.

Revision ID: 001_submission_tables
Revises:
Create Date: 2026-10-18
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_submission_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Users ---
    op.create_table(
        "users",
        sa.Column("wallet_address", sa.String(66), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- Submissions ---
    op.create_table(
        "submissions",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True, autoincrement=True),
        sa.Column(
            "wallet_address",
            sa.String(66),
            sa.ForeignKey("users.wallet_address", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("chapter_id", sa.Integer, nullable=False),
        sa.Column("vercel_url", sa.Text, nullable=True),
        sa.Column("suiscan_url", sa.Text, nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewer_notes", sa.Text, nullable=True),
        sa.UniqueConstraint("wallet_address", "chapter_id", name="uq_submission_wallet_chapter"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_submission_status",
        ),
    )
    op.create_index(
        "idx_submissions_wallet_submitted",
        "submissions",
        ["wallet_address", "submitted_at"],
    )

    # --- User Progress ---
    op.create_table(
        "user_progress",
        sa.Column(
            "wallet_address",
            sa.String(66),
            sa.ForeignKey("users.wallet_address", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("current_chapter", sa.Integer, nullable=False, server_default="1"),
        sa.Column("data", sa.JSON, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("user_progress")
    op.drop_index("idx_submissions_wallet_submitted", table_name="submissions")
    op.drop_table("submissions")
    op.drop_table("users")
