"""Admin routes for application moderation and counter repair."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.exceptions import (
    ApplicationError,
    internal_error_exception,
    to_http_exception,
)
from app.core.identity import Actor, Role, require_roles
from app.models.application import ApplicationStatus
from app.routers.applications import get_application_service
from app.schemas.application import (
    ApplicationListResponse,
    Pagination,
    ReconcileResponse,
)
from app.services.application_service import ApplicationService
from app.utils.projections import project_applications

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

admin_only = require_roles(Role.ADMIN)


@router.get("/applications", response_model=ApplicationListResponse)
async def get_all_applications(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    job: int | None = Query(default=None, ge=1),
    seeker: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(
        default=settings.default_page_size, ge=1, le=settings.max_page_size
    ),
    actor: Actor = Depends(admin_only),
    service: ApplicationService = Depends(get_application_service),
):
    """List all applications, including recruiter-only fields."""
    try:
        applications, total = await service.list_all(
            status=status_filter, job_id=job, seeker_id=seeker, page=page, limit=limit
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error listing applications: {e}")
        raise internal_error_exception()

    return ApplicationListResponse(
        applications=project_applications(applications, actor.role),
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            total_pages=ApplicationService.total_pages(total, limit),
        ),
    )


@router.post("/jobs/{job_id}/reconcile", response_model=ReconcileResponse)
async def reconcile_job_applications(
    job_id: int,
    actor: Actor = Depends(admin_only),
    service: ApplicationService = Depends(get_application_service),
):
    """Recompute a job's applicant counter from stored applications."""
    try:
        previous, actual = await service.reconcile_applicant_count(job_id)
    except ApplicationError as e:
        raise to_http_exception(e)
    except SQLAlchemyError as e:
        logger.error(f"Database error reconciling job {job_id}: {e}")
        raise internal_error_exception()

    logger.info(
        f"Admin {actor.id} reconciled job {job_id}: {previous} -> {actual}"
    )
    return ReconcileResponse(
        job_id=job_id, previous_total=previous, total_applications=actual
    )
