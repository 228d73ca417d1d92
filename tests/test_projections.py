"""Tests for role-based application projections."""

from datetime import datetime

import pytest

from app.core.identity import Role
from app.models.application import Application, StatusHistoryEntry
from app.utils.projections import (
    hidden_fields,
    project_application,
    project_applications,
)

STAMP = datetime(2026, 10, 19, 9, 30)


@pytest.fixture
def application():
    """A fully populated, unsaved application record."""
    return Application(
        id=1,
        job_id=10,
        seeker_id="seeker-1",
        recruiter_id="recruiter-1",
        company_id="company-1",
        resume_url="https://cdn.example.com/r.pdf",
        resume_original_name="r.pdf",
        cover_letter="Hello",
        status="shortlisted",
        interview_details=None,
        recruiter_notes="Confident, strong system design",
        rating=5,
        applied_at=STAMP,
        created_at=STAMP,
        updated_at=STAMP,
        status_history=[
            StatusHistoryEntry(
                status="applied",
                changed_at=STAMP,
                changed_by="seeker-1",
                remarks="Application submitted",
            ),
            StatusHistoryEntry(
                status="shortlisted",
                changed_at=STAMP,
                changed_by="recruiter-1",
                remarks="",
            ),
        ],
    )


class TestHiddenFields:
    """Tests for the field visibility table."""

    def test_seeker_detail(self):
        assert hidden_fields(Role.SEEKER) == {"recruiter_notes", "rating"}

    def test_recruiter_detail(self):
        assert hidden_fields(Role.RECRUITER) == frozenset()

    def test_seeker_listing(self):
        assert hidden_fields(Role.SEEKER, listing=True) == {
            "recruiter_notes",
            "rating",
            "status_history",
        }

    def test_recruiter_listing(self):
        assert hidden_fields(Role.RECRUITER, listing=True) == {"status_history"}


class TestProjectApplication:
    """Tests for single-record projection."""

    def test_seeker_never_sees_recruiter_fields(self, application):
        view = project_application(application, Role.SEEKER)

        assert "recruiter_notes" not in view
        assert "rating" not in view
        assert len(view["status_history"]) == 2

    def test_recruiter_sees_everything(self, application):
        view = project_application(application, Role.RECRUITER)

        assert view["recruiter_notes"] == "Confident, strong system design"
        assert view["rating"] == 5
        assert view["resume"] == {
            "url": "https://cdn.example.com/r.pdf",
            "original_name": "r.pdf",
        }

    def test_admin_sees_recruiter_fields(self, application):
        view = project_application(application, Role.ADMIN)

        assert view["rating"] == 5

    def test_view_is_json_ready(self, application):
        view = project_application(application, Role.RECRUITER)

        assert view["status"] == "shortlisted"
        assert view["applied_at"] == "2026-10-19T09:30:00"


class TestProjectApplications:
    """Tests for listing projection."""

    def test_seeker_listing(self, application):
        [view] = project_applications([application], Role.SEEKER)

        assert "status_history" not in view
        assert "recruiter_notes" not in view
        assert "rating" not in view

    def test_recruiter_listing(self, application):
        [view] = project_applications([application], Role.RECRUITER)

        assert "status_history" not in view
        assert view["rating"] == 5
