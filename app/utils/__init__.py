"""Utility functions and classes."""

from app.utils.projections import project_application, project_applications
from app.utils.validators import (
    ValidationResult,
    validate_interview_details,
    validate_rating,
)

__all__ = [
    "ValidationResult",
    "project_application",
    "project_applications",
    "validate_interview_details",
    "validate_rating",
]
