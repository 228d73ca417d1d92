"""Tests for the job directory collaborator."""

from datetime import timedelta

import pytest
from sqlalchemy import update

from app.core.exceptions import NotFoundError
from app.models.job import Job, JobStatus
from app.services.job_directory import JobDirectory
from app.utils.validators import utc_now


@pytest.fixture
def directory():
    return JobDirectory()


class TestFindEligibleJob:
    """Tests for job eligibility."""

    @pytest.mark.asyncio
    async def test_active_job_with_future_deadline(
        self, directory, make_job, session_factory
    ):
        job = await make_job()

        async with session_factory() as session:
            found = await directory.find_eligible_job(session, job.id)

        assert found.id == job.id

    @pytest.mark.asyncio
    async def test_paused_job_not_eligible(self, directory, make_job, session_factory):
        job = await make_job(status=JobStatus.PAUSED)

        async with session_factory() as session:
            with pytest.raises(NotFoundError) as exc_info:
                await directory.find_eligible_job(session, job.id)

        assert "no longer accepting" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_expired_job_not_eligible(
        self, directory, make_job, session_factory
    ):
        job = await make_job(application_deadline=utc_now() - timedelta(days=1))

        async with session_factory() as session:
            with pytest.raises(NotFoundError):
                await directory.find_eligible_job(session, job.id)


class TestFindJobOwnedBy:
    """Tests for job ownership lookups."""

    @pytest.mark.asyncio
    async def test_owner_finds_job(self, directory, make_job, session_factory):
        job = await make_job(recruiter_id="owner")

        async with session_factory() as session:
            found = await directory.find_job_owned_by(session, job.id, "owner")

        assert found.id == job.id

    @pytest.mark.asyncio
    async def test_non_owner_gets_not_found(
        self, directory, make_job, session_factory
    ):
        job = await make_job(recruiter_id="owner")

        async with session_factory() as session:
            with pytest.raises(NotFoundError):
                await directory.find_job_owned_by(session, job.id, "intruder")


class TestApplicantCounter:
    """Tests for counter maintenance and reconciliation."""

    @pytest.mark.asyncio
    async def test_increment_and_decrement(
        self, directory, make_job, session_factory, get_job
    ):
        job = await make_job()

        async with session_factory() as session:
            await directory.increment_applicant_count(session, job.id, 1)
            await directory.increment_applicant_count(session, job.id, 1)
            await directory.increment_applicant_count(session, job.id, -1)
            await session.commit()

        assert (await get_job(job.id)).total_applications == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("delta", [0, 2, -5])
    async def test_rejects_other_deltas(
        self, directory, make_job, session_factory, delta
    ):
        job = await make_job()

        async with session_factory() as session:
            with pytest.raises(ValueError):
                await directory.increment_applicant_count(session, job.id, delta)

    @pytest.mark.asyncio
    async def test_reconcile_repairs_drift(
        self, directory, service, make_job, apply_request, session_factory, get_job
    ):
        job = await make_job()
        first = await service.submit("seeker-1", apply_request(job.id))
        await service.submit("seeker-2", apply_request(job.id))
        await service.withdraw("seeker-1", first.id)

        async with session_factory() as session:
            await session.execute(
                update(Job).where(Job.id == job.id).values(total_applications=7)
            )
            await session.commit()

        async with session_factory() as session:
            previous, actual = await directory.reconcile_applicant_count(
                session, job.id
            )
            await session.commit()

        assert (previous, actual) == (7, 1)
        assert (await get_job(job.id)).total_applications == 1

    @pytest.mark.asyncio
    async def test_reconcile_missing_job(self, directory, session_factory):
        async with session_factory() as session:
            with pytest.raises(NotFoundError):
                await directory.reconcile_applicant_count(session, 123)

    @pytest.mark.asyncio
    async def test_service_reconcile(self, service, submitted, get_job):
        job, _ = submitted

        previous, actual = await service.reconcile_applicant_count(job.id)

        assert previous == actual == 1
        assert (await get_job(job.id)).total_applications == 1
