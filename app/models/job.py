"""Job posting model owned by the job directory."""

from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.storage import Base


def _utc_now() -> datetime:
    """Return current UTC time as timezone-naive datetime for DB storage."""
    return datetime.now(UTC).replace(tzinfo=None)


class JobStatus(StrEnum):
    DRAFT = "draft"
    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"
    REJECTED = "rejected"


class Job(Base):
    """Model for a job posting.

    Only the fields the application lifecycle reads or mutates are mapped.
    """

    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recruiter_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(150), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=JobStatus.PENDING, index=True
    )
    application_deadline: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Denormalized count of non-withdrawn applications
    total_applications: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, onupdate=_utc_now, nullable=False
    )
