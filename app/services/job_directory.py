"""Job directory operations consumed by the application lifecycle."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.application import Application, ApplicationStatus
from app.models.job import Job, JobStatus
from app.utils.validators import utc_now

logger = logging.getLogger(__name__)


class JobDirectory:
    """Reads job eligibility and owns the applicant counter.

    Methods take the caller's session so counter changes commit in the
    same transaction as the application write that caused them.
    """

    async def find_eligible_job(self, session: AsyncSession, job_id: int) -> Job:
        """Return the job if it is active and its deadline has not passed."""
        result = await session.execute(
            select(Job).where(
                Job.id == job_id,
                Job.status == JobStatus.ACTIVE,
                Job.application_deadline >= utc_now(),
            )
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError(
                "Job", "Job not found or no longer accepting applications"
            )
        return job

    async def find_job_owned_by(
        self, session: AsyncSession, job_id: int, recruiter_id: str
    ) -> Job:
        result = await session.execute(
            select(Job).where(Job.id == job_id, Job.recruiter_id == recruiter_id)
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError("Job", "Job not found or you are not the recruiter")
        return job

    async def increment_applicant_count(
        self, session: AsyncSession, job_id: int, delta: int
    ) -> None:
        """Apply +1/-1 to the job's applicant counter in a single UPDATE."""
        if delta not in (1, -1):
            raise ValueError(f"Applicant count delta must be +1 or -1, got {delta}")

        await session.execute(
            update(Job)
            .where(Job.id == job_id)
            .values(total_applications=Job.total_applications + delta)
            .execution_options(synchronize_session=False)
        )
        logger.info(f"Job {job_id} applicant count changed by {delta:+d}")

    async def count_active_applications(
        self, session: AsyncSession, job_id: int
    ) -> int:
        result = await session.execute(
            select(func.count(Application.id)).where(
                Application.job_id == job_id,
                Application.status != ApplicationStatus.WITHDRAWN,
            )
        )
        return result.scalar_one()

    async def reconcile_applicant_count(
        self, session: AsyncSession, job_id: int
    ) -> tuple[int, int]:
        """Recompute the counter from the applications table.

        Returns the previous and the recomputed value.
        """
        job = await session.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job")

        previous = job.total_applications
        actual = await self.count_active_applications(session, job_id)

        if previous != actual:
            logger.warning(
                f"Job {job_id} applicant count drifted: stored {previous}, actual {actual}"
            )
            await session.execute(
                update(Job)
                .where(Job.id == job_id)
                .values(total_applications=actual)
                .execution_options(synchronize_session=False)
            )

        return previous, actual


job_directory = JobDirectory()
