"""API routes for job applications."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.exceptions import (
    ApplicationError,
    internal_error_exception,
    to_http_exception,
)
from app.core.identity import Actor, Role, require_roles
from app.models.application import ApplicationStatus
from app.schemas.application import (
    ApplicationCreateRequest,
    ApplicationListResponse,
    AppliedCheckResponse,
    AppliedSummary,
    InterviewRequest,
    Pagination,
    RatingRequest,
    RecruiterNotesRequest,
    StatusUpdateRequest,
)
from app.services.application_service import (
    ApplicationService,
    create_application_service,
)
from app.utils.projections import project_application, project_applications

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])

seeker_only = require_roles(Role.SEEKER)
recruiter_only = require_roles(Role.RECRUITER)
application_party = require_roles(Role.SEEKER, Role.RECRUITER)


async def get_application_service() -> ApplicationService:
    """Create application service with default storage."""
    return create_application_service()


def _handle_failure(error: Exception, operation: str) -> HTTPException:
    """Translate a failure at the operation boundary into an HTTP error."""
    if isinstance(error, ApplicationError):
        return to_http_exception(error)

    logger.error(f"Database error during {operation}: {error}")
    return internal_error_exception()


def _list_response(applications, total: int, page: int, limit: int, role: Role):
    return ApplicationListResponse(
        applications=project_applications(applications, role),
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            total_pages=ApplicationService.total_pages(total, limit),
        ),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    request: ApplicationCreateRequest,
    actor: Actor = Depends(seeker_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Submit an application to an open job."""
    try:
        application = await service.submit(actor.id, request)
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "submit")

    return {
        "message": "Application submitted successfully",
        "application": project_application(application, actor.role),
    }


@router.get("/mine", response_model=ApplicationListResponse)
async def get_my_applications(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(
        default=settings.default_page_size, ge=1, le=settings.max_page_size
    ),
    actor: Actor = Depends(seeker_only),
    service: ApplicationService = Depends(get_application_service),
):
    """List the seeker's own applications."""
    try:
        applications, total = await service.list_for_seeker(
            actor.id, status=status_filter, page=page, limit=limit
        )
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "list_for_seeker")

    return _list_response(applications, total, page, limit, actor.role)


@router.get("/job/{job_id}/applied", response_model=AppliedCheckResponse)
async def check_if_applied(
    job_id: int,
    actor: Actor = Depends(seeker_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Tell a seeker whether they already applied to a job."""
    try:
        application = await service.check_if_applied(actor.id, job_id)
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "check_if_applied")

    return AppliedCheckResponse(
        has_applied=application is not None,
        application=(
            AppliedSummary.model_validate(application) if application else None
        ),
    )


@router.get("/job/{job_id}", response_model=ApplicationListResponse)
async def get_job_applications(
    job_id: int,
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(
        default=settings.default_page_size, ge=1, le=settings.max_page_size
    ),
    actor: Actor = Depends(recruiter_only),
    service: ApplicationService = Depends(get_application_service),
):
    """List applications to a job owned by the recruiter."""
    try:
        applications, total = await service.list_for_job(
            actor.id, job_id, status=status_filter, page=page, limit=limit
        )
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "list_for_job")

    return _list_response(applications, total, page, limit, actor.role)


@router.get("/{application_id}")
async def get_application(
    application_id: int,
    actor: Actor = Depends(application_party),
    service: ApplicationService = Depends(get_application_service),
):
    """Read a single application as the seeker or the recruiter."""
    try:
        application = await service.get_application(actor, application_id)
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "get_application")

    return {"application": project_application(application, actor.role)}


@router.patch("/{application_id}/withdraw")
async def withdraw_application(
    application_id: int,
    actor: Actor = Depends(seeker_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Withdraw the seeker's application."""
    try:
        application = await service.withdraw(actor.id, application_id)
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "withdraw")

    return {
        "message": "Application withdrawn successfully",
        "status": application.status,
    }


@router.patch("/{application_id}/status")
async def update_application_status(
    application_id: int,
    request: StatusUpdateRequest,
    actor: Actor = Depends(recruiter_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Move an application to a new status."""
    try:
        application = await service.change_status(
            actor.id, application_id, request.status, request.remarks
        )
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "change_status")

    return {
        "message": "Application status updated successfully",
        "status": application.status,
    }


@router.patch("/{application_id}/notes")
async def add_recruiter_notes(
    application_id: int,
    request: RecruiterNotesRequest,
    actor: Actor = Depends(recruiter_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Store private recruiter notes."""
    try:
        application = await service.add_recruiter_notes(
            actor.id, application_id, request.recruiter_notes
        )
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "add_recruiter_notes")

    return {
        "message": "Notes added successfully",
        "recruiter_notes": application.recruiter_notes,
    }


@router.patch("/{application_id}/rating")
async def rate_applicant(
    application_id: int,
    request: RatingRequest,
    actor: Actor = Depends(recruiter_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Store a private 1-5 rating."""
    try:
        application = await service.rate_applicant(
            actor.id, application_id, request.rating
        )
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "rate_applicant")

    return {"message": "Applicant rated successfully", "rating": application.rating}


@router.patch("/{application_id}/interview")
async def schedule_interview(
    application_id: int,
    request: InterviewRequest,
    actor: Actor = Depends(recruiter_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Schedule or reschedule an interview."""
    try:
        application = await service.schedule_interview(
            actor.id, application_id, request
        )
    except (ApplicationError, SQLAlchemyError) as e:
        raise _handle_failure(e, "schedule_interview")

    view = project_application(application, actor.role)
    return {
        "message": "Interview scheduled successfully",
        "status": view["status"],
        "interview_details": view["interview_details"],
    }
