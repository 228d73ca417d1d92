"""Core application components."""

from app.core.config import settings
from app.core.exceptions import (
    ApplicationError,
    DuplicateApplicationError,
    InputValidationError,
    InvalidTransitionError,
    NotFoundError,
)
from app.core.identity import Actor, Role
from app.core.storage import Base, async_session

__all__ = [
    "Actor",
    "ApplicationError",
    "Base",
    "DuplicateApplicationError",
    "InputValidationError",
    "InvalidTransitionError",
    "NotFoundError",
    "Role",
    "async_session",
    "settings",
]
