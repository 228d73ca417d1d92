"""Validation logic for applications."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from app.core.exceptions import FieldError
from app.models.application import InterviewType
from app.schemas.application import InterviewRequest


@dataclass
class ValidationResult:
    """Result of validation process."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field=field_name, message=message))


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC, the form stored in the database.

    Naive input is taken to already be UTC.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def validate_interview_details(
    details: InterviewRequest, now: datetime | None = None
) -> ValidationResult:
    """Validate an interview schedule against the current time."""
    result = ValidationResult()
    now = to_naive_utc(now) if now is not None else utc_now()

    if to_naive_utc(details.date) <= now:
        result.add("date", "Interview date must be in the future")

    if not details.time.strip():
        result.add("time", "Time is required")

    if details.type == InterviewType.VIDEO and not details.meeting_link:
        result.add("meeting_link", "Meeting link is required for video interviews")

    return result


def validate_rating(rating: int | None) -> ValidationResult:
    """Validate a recruiter rating."""
    result = ValidationResult()

    if rating is None:
        result.add("rating", "Rating is required")
    elif not 1 <= rating <= 5:
        result.add("rating", "Rating must be between 1 and 5")

    return result
