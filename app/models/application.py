"""Job application and status history models."""

from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.storage import Base


def _utc_now() -> datetime:
    """Return current UTC time as timezone-naive datetime for DB storage."""
    return datetime.now(UTC).replace(tzinfo=None)


class ApplicationStatus(StrEnum):
    APPLIED = "applied"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    INTERVIEW = "interview"
    OFFERED = "offered"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


TERMINAL_STATUSES = frozenset(
    {
        ApplicationStatus.HIRED.value,
        ApplicationStatus.REJECTED.value,
        ApplicationStatus.WITHDRAWN.value,
    }
)


class InterviewType(StrEnum):
    IN_PERSON = "in-person"
    PHONE = "phone"
    VIDEO = "video"


class Application(Base):
    """One seeker's candidacy for one job."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "seeker_id", name="uq_applications_job_seeker"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[int] = mapped_column(
        ForeignKey("jobs.id"), nullable=False, index=True
    )
    seeker_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Snapshots of the job's owner at submission time, never re-derived
    recruiter_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    resume_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    resume_original_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    cover_letter: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ApplicationStatus.APPLIED, index=True
    )
    interview_details: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Recruiter-only fields
    recruiter_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rating: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)

    applied_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, onupdate=_utc_now, nullable=False
    )

    status_history: Mapped[list["StatusHistoryEntry"]] = relationship(
        back_populates="application",
        order_by="StatusHistoryEntry.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def resume(self) -> dict:
        return {"url": self.resume_url, "original_name": self.resume_original_name}


class StatusHistoryEntry(Base):
    """Immutable record of one status transition.

    Entries are only ever inserted, so concurrent writers each add a row
    instead of rewriting a shared list.
    """

    __tablename__ = "application_status_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[int] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False
    )
    changed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")

    application: Mapped[Application] = relationship(back_populates="status_history")
