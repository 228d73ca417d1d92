"""Database models."""

from app.models.application import (
    TERMINAL_STATUSES,
    Application,
    ApplicationStatus,
    InterviewType,
    StatusHistoryEntry,
)
from app.models.job import Job, JobStatus

__all__ = [
    "TERMINAL_STATUSES",
    "Application",
    "ApplicationStatus",
    "InterviewType",
    "Job",
    "JobStatus",
    "StatusHistoryEntry",
]
