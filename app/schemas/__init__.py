"""Pydantic schemas for request/response validation."""

from app.schemas.application import (
    ApplicationCreateRequest,
    ApplicationDetail,
    InterviewRequest,
    RatingRequest,
    RecruiterNotesRequest,
    StatusUpdateRequest,
)

__all__ = [
    "ApplicationCreateRequest",
    "ApplicationDetail",
    "InterviewRequest",
    "RatingRequest",
    "RecruiterNotesRequest",
    "StatusUpdateRequest",
]
