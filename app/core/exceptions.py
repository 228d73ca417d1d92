"""Custom exceptions for the application."""

import logging
from dataclasses import asdict, dataclass

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A single invalid input field."""

    field: str
    message: str


class ApplicationError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InputValidationError(ApplicationError):
    """Raised when request input is malformed or out of range."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("Validation failed")

    @classmethod
    def single(cls, field: str, message: str) -> "InputValidationError":
        return cls([FieldError(field=field, message=message)])


class NotFoundError(ApplicationError):
    """Raised when a record is missing or hidden by ownership filters."""

    def __init__(self, resource: str, detail: str | None = None):
        self.resource = resource
        super().__init__(detail or f"{resource} not found")


class DuplicateApplicationError(ApplicationError):
    """Raised when a seeker applies to the same job twice."""

    def __init__(self, job_id: int, seeker_id: str):
        self.job_id = job_id
        self.seeker_id = seeker_id
        super().__init__("You have already applied to this job")


class InvalidTransitionError(ApplicationError):
    """Raised when an application is terminal or locked against the action."""

    def __init__(self, application_id: int, current_status: str, action: str):
        self.application_id = application_id
        self.current_status = current_status
        self.action = action
        super().__init__(
            f"Cannot {action} an application that is already {current_status}"
        )


def unauthorized_exception(detail: str = "Not authenticated") -> HTTPException:
    """Return a 401 Unauthorized exception."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden_exception(
    detail: str = "Forbidden: You do not have permission to perform this action",
) -> HTTPException:
    """Return a 403 Forbidden exception."""
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=detail,
    )


def not_found_exception(detail: str = "Resource not found") -> HTTPException:
    """Return a 404 Not Found exception."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )


def internal_error_exception() -> HTTPException:
    """Return a 500 exception that does not expose the underlying cause."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def validation_error_body(errors: list[FieldError]) -> dict:
    """Structured body shared by every validation failure response."""
    return {
        "message": "Validation failed",
        "errors": [asdict(error) for error in errors],
    }


def to_http_exception(error: ApplicationError) -> HTTPException:
    """Map a domain error onto its HTTP response."""
    if isinstance(error, InputValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation_error_body(error.errors),
        )
    if isinstance(error, NotFoundError):
        return not_found_exception(error.message)
    if isinstance(error, DuplicateApplicationError | InvalidTransitionError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error.message,
        )

    logger.error(f"Unmapped application error: {error.message}")
    return internal_error_exception()
