"""Role-keyed read projections of application records.

Every response that serves an application goes through
``project_application`` so that recruiter-only fields are stripped in one
place.
"""

from typing import Any

from app.core.identity import Role
from app.models.application import Application
from app.schemas.application import ApplicationDetail

RECRUITER_ONLY_FIELDS = frozenset({"recruiter_notes", "rating"})
HISTORY_FIELDS = frozenset({"status_history"})


def hidden_fields(viewer_role: Role, *, listing: bool = False) -> frozenset[str]:
    """Fields removed from the record for the given viewer."""
    hidden = frozenset()
    if viewer_role == Role.SEEKER:
        hidden |= RECRUITER_ONLY_FIELDS
    if listing:
        hidden |= HISTORY_FIELDS
    return hidden


def project_application(
    application: Application | ApplicationDetail,
    viewer_role: Role,
    *,
    listing: bool = False,
) -> dict[str, Any]:
    """Return the JSON-ready view of an application for a viewer role."""
    if not isinstance(application, ApplicationDetail):
        application = ApplicationDetail.model_validate(application)

    return application.model_dump(
        mode="json", exclude=set(hidden_fields(viewer_role, listing=listing))
    )


def project_applications(
    applications: list[Application], viewer_role: Role
) -> list[dict[str, Any]]:
    """Listing view: history is always omitted."""
    return [
        project_application(application, viewer_role, listing=True)
        for application in applications
    ]
