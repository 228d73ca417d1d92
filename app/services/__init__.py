"""Application services."""

from app.services.application_service import (
    ApplicationService,
    create_application_service,
)
from app.services.job_directory import JobDirectory, job_directory

__all__ = [
    "ApplicationService",
    "JobDirectory",
    "create_application_service",
    "job_directory",
]
