"""Schemas for job application requests and responses."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from app.core.config import settings
from app.models.application import ApplicationStatus, InterviewType


class ResumeIn(BaseModel):
    """Uploaded resume descriptor."""

    url: HttpUrl = Field(..., description="Public URL of the uploaded resume")
    original_name: str | None = Field(
        default=None, max_length=255, description="Original file name"
    )


class ApplicationCreateRequest(BaseModel):
    """Request to apply to a job."""

    job: int = Field(..., ge=1, description="ID of the job to apply to")
    resume: ResumeIn
    cover_letter: str | None = Field(
        default=None,
        max_length=settings.cover_letter_max_length,
        description="Optional cover letter",
    )


class StatusUpdateRequest(BaseModel):
    """Recruiter request to move an application to a new status."""

    status: ApplicationStatus
    remarks: str | None = Field(
        default=None, max_length=settings.remarks_max_length
    )


class RecruiterNotesRequest(BaseModel):
    """Recruiter-only notes on an applicant."""

    recruiter_notes: str = Field(
        ..., max_length=settings.recruiter_notes_max_length
    )


class RatingRequest(BaseModel):
    """Recruiter-only rating of an applicant."""

    rating: int | None = Field(default=None, ge=1, le=5)


class InterviewRequest(BaseModel):
    """Interview scheduling details.

    Cross-field and time-dependent checks run in
    ``app.utils.validators.validate_interview_details``.
    """

    date: datetime = Field(..., description="Interview date and time")
    time: str = Field(..., min_length=1, description="Display time slot")
    location: str | None = None
    type: InterviewType
    meeting_link: HttpUrl | Literal[""] | None = None
    notes: str | None = None


class ResumeOut(BaseModel):
    url: str
    original_name: str | None = None


class StatusHistoryItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: ApplicationStatus
    changed_at: datetime
    changed_by: str
    remarks: str = ""


class InterviewDetailsOut(BaseModel):
    date: datetime
    time: str
    location: str | None = None
    type: InterviewType
    meeting_link: str | None = None
    notes: str | None = None


class ApplicationDetail(BaseModel):
    """Full server-side view of an application."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: int
    seeker_id: str
    recruiter_id: str
    company_id: str
    resume: ResumeOut
    cover_letter: str = ""
    status: ApplicationStatus
    status_history: list[StatusHistoryItem] = Field(default_factory=list)
    interview_details: InterviewDetailsOut | None = None
    recruiter_notes: str = ""
    rating: int | None = None
    applied_at: datetime
    created_at: datetime
    updated_at: datetime


class AppliedSummary(BaseModel):
    """Lightweight projection used for the "already applied" check."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    status: ApplicationStatus
    applied_at: datetime


class AppliedCheckResponse(BaseModel):
    has_applied: bool
    application: AppliedSummary | None = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ApplicationListResponse(BaseModel):
    applications: list[dict[str, Any]]
    pagination: Pagination


class ReconcileResponse(BaseModel):
    job_id: int
    previous_total: int
    total_applications: int
