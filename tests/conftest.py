"""Pytest configuration and fixtures."""

import os
import sys
from datetime import timedelta

import pytest
import pytest_asyncio

# Add the app directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

SEEKER_ID = "seeker-1"
OTHER_SEEKER_ID = "seeker-2"
RECRUITER_ID = "recruiter-1"
OTHER_RECRUITER_ID = "recruiter-2"
COMPANY_ID = "company-1"


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database shared by every session of one test."""
    from app.core.storage import Base
    import app.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def make_job(session_factory):
    """Factory that persists a job; active with a deadline tomorrow by default."""
    from app.models.job import Job, JobStatus
    from app.utils.validators import utc_now

    async def _make_job(**overrides):
        values = {
            "recruiter_id": RECRUITER_ID,
            "company_id": COMPANY_ID,
            "title": "Backend Engineer",
            "status": JobStatus.ACTIVE,
            "application_deadline": utc_now() + timedelta(days=1),
            "total_applications": 0,
        }
        values.update(overrides)
        async with session_factory() as session:
            job = Job(**values)
            session.add(job)
            await session.commit()
            return job

    return _make_job


@pytest.fixture
def get_job(session_factory):
    """Reload a job to observe its counter."""
    from app.models.job import Job

    async def _get_job(job_id: int):
        async with session_factory() as session:
            return await session.get(Job, job_id)

    return _get_job


@pytest.fixture
def service(session_factory):
    """ApplicationService bound to the test database."""
    from app.services.application_service import ApplicationService

    return ApplicationService(session_factory=session_factory)


@pytest.fixture
def apply_request():
    """Factory for ApplicationCreateRequest."""
    from app.schemas.application import ApplicationCreateRequest

    def _apply_request(job_id: int, **overrides):
        data = {
            "job": job_id,
            "resume": {
                "url": "https://cdn.example.com/resumes/seeker-1.pdf",
                "original_name": "resume.pdf",
            },
            "cover_letter": "I would love to join the team.",
        }
        data.update(overrides)
        return ApplicationCreateRequest(**data)

    return _apply_request


@pytest.fixture
def interview_request():
    """Factory for InterviewRequest, three days out over video by default."""
    from app.schemas.application import InterviewRequest
    from app.utils.validators import utc_now

    def _interview_request(**overrides):
        data = {
            "date": utc_now() + timedelta(days=3),
            "time": "10:00",
            "type": "video",
            "meeting_link": "https://meet.example.com/abc",
            "notes": "Technical round",
        }
        data.update(overrides)
        return InterviewRequest(**data)

    return _interview_request


@pytest_asyncio.fixture
async def submitted(service, make_job, apply_request):
    """A job with one fresh application from SEEKER_ID."""
    job = await make_job()
    application = await service.submit(SEEKER_ID, apply_request(job.id))
    return job, application
