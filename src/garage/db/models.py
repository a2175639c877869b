"""ORM models for wallets, challenge submissions, and dashboard progress."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garage.db.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns
_BigIntId = BigInteger().with_variant(Integer, "sqlite")

SUBMISSION_STATUSES = ("pending", "accepted", "rejected")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """A wallet that has submitted at least one challenge."""

    __tablename__ = "users"

    wallet_address: Mapped[str] = mapped_column(String(66), primary_key=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    submissions: Mapped[list[Submission]] = relationship("Submission", back_populates="user")


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


class Submission(Base):
    """Challenge completion claim: UNIQUE(wallet_address, chapter_id)."""

    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint("wallet_address", "chapter_id", name="uq_submission_wallet_chapter"),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_submission_status",
        ),
        Index("idx_submissions_wallet_submitted", "wallet_address", "submitted_at"),
    )

    id: Mapped[int] = mapped_column(_BigIntId, primary_key=True, autoincrement=True)
    wallet_address: Mapped[str] = mapped_column(
        String(66), ForeignKey("users.wallet_address", ondelete="CASCADE"), nullable=False
    )
    chapter_id: Mapped[int] = mapped_column(Integer, nullable=False)
    vercel_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    suiscan_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending", server_default="pending")
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewer_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="submissions")


# ---------------------------------------------------------------------------
# Progress (written by the dashboard, read by /api/user-status)
# ---------------------------------------------------------------------------


class UserProgress(Base):
    """Freeform per-wallet progress record."""

    __tablename__ = "user_progress"

    wallet_address: Mapped[str] = mapped_column(
        String(66), ForeignKey("users.wallet_address", ondelete="CASCADE"), primary_key=True
    )
    current_chapter: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
