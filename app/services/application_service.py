"""Application service: the job application lifecycle."""

import logging
import math
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload, selectinload

from app.core.config import settings
from app.core.exceptions import (
    DuplicateApplicationError,
    InputValidationError,
    InvalidTransitionError,
    NotFoundError,
)
from app.core.identity import Actor
from app.core.storage import async_session
from app.models.application import (
    TERMINAL_STATUSES,
    Application,
    ApplicationStatus,
    StatusHistoryEntry,
)
from app.schemas.application import ApplicationCreateRequest, InterviewRequest
from app.services.job_directory import JobDirectory, job_directory
from app.utils.validators import (
    to_naive_utc,
    utc_now,
    validate_interview_details,
    validate_rating,
)

logger = logging.getLogger(__name__)

WITHDRAWN_ONLY = frozenset({ApplicationStatus.WITHDRAWN.value})


class ApplicationService:
    """Core service for the application state machine.

    Each public method is one unit of work: it opens a session, commits
    its writes in a single transaction and returns fresh records.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = async_session,
        jobs: JobDirectory = job_directory,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_factory = session_factory
        self.jobs = jobs
        self.clock = clock

    async def submit(
        self, seeker_id: str, request: ApplicationCreateRequest
    ) -> Application:
        """Create an application for an eligible job and bump its counter."""
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    job = await self.jobs.find_eligible_job(session, request.job)

                    if await self._has_already_applied(session, job.id, seeker_id):
                        raise DuplicateApplicationError(job.id, seeker_id)

                    now = self.clock()
                    application = Application(
                        job_id=job.id,
                        seeker_id=seeker_id,
                        recruiter_id=job.recruiter_id,
                        company_id=job.company_id,
                        resume_url=str(request.resume.url),
                        resume_original_name=request.resume.original_name,
                        cover_letter=request.cover_letter or "",
                        status=ApplicationStatus.APPLIED,
                        applied_at=now,
                        status_history=[
                            StatusHistoryEntry(
                                status=ApplicationStatus.APPLIED,
                                changed_at=now,
                                changed_by=seeker_id,
                                remarks="Application submitted",
                            )
                        ],
                    )
                    session.add(application)
                    # The unique (job, seeker) index rejects a concurrent twin here
                    await session.flush()
                    application_id = application.id

                    await self.jobs.increment_applicant_count(session, job.id, 1)
            except IntegrityError as e:
                logger.warning(
                    f"Duplicate application rejected by storage: job {request.job}, "
                    f"seeker {seeker_id}"
                )
                raise DuplicateApplicationError(request.job, seeker_id) from e

            logger.info(
                f"Application {application_id} submitted by seeker {seeker_id} "
                f"for job {request.job}"
            )
            return await self._load(session, application_id)

    async def withdraw(self, seeker_id: str, application_id: int) -> Application:
        """Withdraw a non-terminal application and release its counter slot."""
        async with self.session_factory() as session:
            async with session.begin():
                application = await self._find_owned(
                    session, application_id, seeker_id=seeker_id
                )
                if application.status in TERMINAL_STATUSES:
                    raise InvalidTransitionError(
                        application_id, application.status, "withdraw"
                    )

                await self._transition(
                    session,
                    application_id,
                    ApplicationStatus.WITHDRAWN,
                    blocked=TERMINAL_STATUSES,
                    actor_id=seeker_id,
                    remarks="Application withdrawn by seeker",
                    action="withdraw",
                )
                await self.jobs.increment_applicant_count(
                    session, application.job_id, -1
                )

            logger.info(f"Application {application_id} withdrawn by seeker {seeker_id}")
            return await self._load(session, application_id)

    async def change_status(
        self,
        recruiter_id: str,
        application_id: int,
        new_status: ApplicationStatus,
        remarks: str | None = None,
    ) -> Application:
        """Move an application to any status except withdrawn.

        Recruiters may jump between any statuses; only withdrawn
        applications are locked.
        """
        if new_status == ApplicationStatus.WITHDRAWN:
            raise InputValidationError.single(
                "status", "Only the applicant can withdraw an application"
            )

        async with self.session_factory() as session:
            async with session.begin():
                application = await self._find_owned(
                    session, application_id, recruiter_id=recruiter_id
                )
                if application.status == ApplicationStatus.WITHDRAWN:
                    raise InvalidTransitionError(
                        application_id, application.status, "update"
                    )

                previous = application.status
                await self._transition(
                    session,
                    application_id,
                    new_status,
                    blocked=WITHDRAWN_ONLY,
                    actor_id=recruiter_id,
                    remarks=remarks or "",
                    action="update",
                )

            logger.info(
                f"Application {application_id} moved {previous} -> {new_status} "
                f"by recruiter {recruiter_id}"
            )
            return await self._load(session, application_id)

    async def schedule_interview(
        self,
        recruiter_id: str,
        application_id: int,
        details: InterviewRequest,
    ) -> Application:
        """Set (or overwrite) interview details and force status to interview."""
        validation = validate_interview_details(details, now=self.clock())
        if not validation.is_valid:
            raise InputValidationError(validation.errors)

        interview_date = to_naive_utc(details.date)
        interview = {
            "date": interview_date.isoformat(),
            "time": details.time,
            "location": details.location,
            "type": details.type.value,
            "meeting_link": str(details.meeting_link) if details.meeting_link else None,
            "notes": details.notes,
        }
        remarks = (
            f"Interview scheduled on {interview_date.strftime('%a %b %d %Y')} "
            f"via {details.type.value}"
        )

        async with self.session_factory() as session:
            async with session.begin():
                application = await self._find_owned(
                    session, application_id, recruiter_id=recruiter_id
                )
                if application.status == ApplicationStatus.WITHDRAWN:
                    raise InvalidTransitionError(
                        application_id, application.status, "schedule an interview for"
                    )

                await self._transition(
                    session,
                    application_id,
                    ApplicationStatus.INTERVIEW,
                    blocked=WITHDRAWN_ONLY,
                    actor_id=recruiter_id,
                    remarks=remarks,
                    action="schedule an interview for",
                    interview_details=interview,
                )

            logger.info(
                f"Interview scheduled for application {application_id} "
                f"on {interview['date']} ({interview['type']})"
            )
            return await self._load(session, application_id)

    async def add_recruiter_notes(
        self, recruiter_id: str, application_id: int, notes: str
    ) -> Application:
        if len(notes) > settings.recruiter_notes_max_length:
            raise InputValidationError.single(
                "recruiter_notes",
                f"Notes must be at most {settings.recruiter_notes_max_length} characters",
            )
        return await self._annotate(
            recruiter_id, application_id, recruiter_notes=notes
        )

    async def rate_applicant(
        self, recruiter_id: str, application_id: int, rating: int | None
    ) -> Application:
        validation = validate_rating(rating)
        if not validation.is_valid:
            raise InputValidationError(validation.errors)
        return await self._annotate(recruiter_id, application_id, rating=rating)

    async def get_application(self, actor: Actor, application_id: int) -> Application:
        """Fetch an application for one of its two parties.

        Anyone else gets NotFound so the record's existence is not revealed.
        """
        async with self.session_factory() as session:
            application = await self._load(session, application_id)

        if actor.id not in (application.seeker_id, application.recruiter_id):
            logger.warning(
                f"Actor {actor.id} denied access to application {application_id}"
            )
            raise NotFoundError("Application")
        return application

    async def check_if_applied(self, seeker_id: str, job_id: int) -> Application | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Application)
                .options(noload(Application.status_history))
                .where(Application.job_id == job_id, Application.seeker_id == seeker_id)
            )
            return result.scalar_one_or_none()

    async def list_for_seeker(
        self,
        seeker_id: str,
        status: ApplicationStatus | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> tuple[list[Application], int]:
        async with self.session_factory() as session:
            return await self._list(
                session, [Application.seeker_id == seeker_id], status, page, limit
            )

    async def list_for_job(
        self,
        recruiter_id: str,
        job_id: int,
        status: ApplicationStatus | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> tuple[list[Application], int]:
        async with self.session_factory() as session:
            await self.jobs.find_job_owned_by(session, job_id, recruiter_id)
            return await self._list(
                session, [Application.job_id == job_id], status, page, limit
            )

    async def list_all(
        self,
        status: ApplicationStatus | None = None,
        job_id: int | None = None,
        seeker_id: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> tuple[list[Application], int]:
        """Admin listing across all jobs."""
        filters = []
        if job_id is not None:
            filters.append(Application.job_id == job_id)
        if seeker_id is not None:
            filters.append(Application.seeker_id == seeker_id)

        async with self.session_factory() as session:
            return await self._list(session, filters, status, page, limit)

    async def reconcile_applicant_count(self, job_id: int) -> tuple[int, int]:
        """Recompute a job's applicant counter from stored applications."""
        async with self.session_factory() as session:
            async with session.begin():
                return await self.jobs.reconcile_applicant_count(session, job_id)

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        return math.ceil(total / limit) if limit else 0

    async def _annotate(
        self, recruiter_id: str, application_id: int, **values
    ) -> Application:
        """Write recruiter-only fields; no status change, no history entry."""
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(Application)
                    .where(
                        Application.id == application_id,
                        Application.recruiter_id == recruiter_id,
                    )
                    .values(updated_at=self.clock(), **values)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise NotFoundError(
                        "Application",
                        "Application not found or you are not the recruiter",
                    )

            logger.info(
                f"Recruiter {recruiter_id} updated {', '.join(values)} "
                f"on application {application_id}"
            )
            return await self._load(session, application_id)

    async def _transition(
        self,
        session: AsyncSession,
        application_id: int,
        new_status: ApplicationStatus,
        *,
        blocked: frozenset[str],
        actor_id: str,
        remarks: str,
        action: str,
        **values,
    ) -> None:
        """Set the status and append one history entry.

        The status guard is re-checked inside the UPDATE itself, so a
        concurrent withdrawal committed after our read still wins.
        """
        now = self.clock()
        result = await session.execute(
            update(Application)
            .where(
                Application.id == application_id,
                Application.status.not_in(sorted(blocked)),
            )
            .values(status=new_status, updated_at=now, **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            current = await session.scalar(
                select(Application.status).where(Application.id == application_id)
            )
            logger.warning(
                f"Rejected {action} on application {application_id}: now {current}"
            )
            raise InvalidTransitionError(application_id, current, action)

        session.add(
            StatusHistoryEntry(
                application_id=application_id,
                status=new_status,
                changed_at=now,
                changed_by=actor_id,
                remarks=remarks,
            )
        )
        await session.flush()

    async def _has_already_applied(
        self, session: AsyncSession, job_id: int, seeker_id: str
    ) -> bool:
        """Check if the seeker already applied to this job."""
        result = await session.execute(
            select(Application.id).where(
                Application.job_id == job_id,
                Application.seeker_id == seeker_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def _find_owned(
        self,
        session: AsyncSession,
        application_id: int,
        *,
        seeker_id: str | None = None,
        recruiter_id: str | None = None,
    ) -> Application:
        query = (
            select(Application)
            .options(noload(Application.status_history))
            .where(Application.id == application_id)
        )
        if seeker_id is not None:
            query = query.where(Application.seeker_id == seeker_id)
        if recruiter_id is not None:
            query = query.where(Application.recruiter_id == recruiter_id)

        application = (await session.execute(query)).scalar_one_or_none()
        if application is None:
            detail = (
                "Application not found or you are not the recruiter"
                if recruiter_id is not None
                else "Application not found"
            )
            raise NotFoundError("Application", detail)
        return application

    async def _load(self, session: AsyncSession, application_id: int) -> Application:
        result = await session.execute(
            select(Application)
            .options(selectinload(Application.status_history))
            .where(Application.id == application_id)
            .execution_options(populate_existing=True)
        )
        application = result.scalar_one_or_none()
        if application is None:
            raise NotFoundError("Application")
        return application

    async def _list(
        self,
        session: AsyncSession,
        filters: list,
        status: ApplicationStatus | None,
        page: int,
        limit: int | None,
    ) -> tuple[list[Application], int]:
        limit = min(limit or settings.default_page_size, settings.max_page_size)
        page = max(page, 1)
        if status is not None:
            filters = [*filters, Application.status == status]

        total = await session.scalar(
            select(func.count(Application.id)).where(*filters)
        )
        result = await session.execute(
            select(Application)
            .options(noload(Application.status_history))
            .where(*filters)
            .order_by(Application.applied_at.desc(), Application.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0


def create_application_service(
    session_factory: Callable[[], AsyncSession] = async_session,
    jobs: JobDirectory = job_directory,
) -> ApplicationService:
    """Factory function to create ApplicationService."""
    return ApplicationService(session_factory=session_factory, jobs=jobs)
