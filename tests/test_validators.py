"""Tests for validation logic."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from app.schemas.application import InterviewRequest
from app.utils.validators import (
    ValidationResult,
    to_naive_utc,
    validate_interview_details,
    validate_rating,
)

NOW = datetime(2026, 10, 19, 12, 0, 0)


def _interview(**overrides) -> InterviewRequest:
    data = {
        "date": NOW + timedelta(days=1),
        "time": "14:30",
        "type": "in-person",
        "location": "HQ, floor 3",
    }
    data.update(overrides)
    return InterviewRequest(**data)


class TestValidationResult:
    """Tests for ValidationResult dataclass."""

    def test_empty_result_is_valid(self):
        result = ValidationResult()
        assert result.is_valid is True
        assert result.errors == []

    def test_add_error(self):
        result = ValidationResult()
        result.add("rating", "Rating is required")
        assert result.is_valid is False
        assert result.errors[0].field == "rating"


class TestToNaiveUtc:
    """Tests for datetime normalization."""

    def test_naive_passthrough(self):
        assert to_naive_utc(NOW) == NOW

    def test_aware_converted(self):
        aware = datetime(2026, 10, 19, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_naive_utc(aware) == datetime(2026, 10, 19, 12, 0)

    def test_utc_aware(self):
        assert to_naive_utc(NOW.replace(tzinfo=UTC)) == NOW


class TestValidateInterviewDetails:
    """Tests for interview schedule validation."""

    def test_valid_in_person(self):
        result = validate_interview_details(_interview(), now=NOW)
        assert result.is_valid is True

    def test_valid_video_with_link(self):
        result = validate_interview_details(
            _interview(type="video", meeting_link="https://meet.example.com/x"),
            now=NOW,
        )
        assert result.is_valid is True

    @pytest.mark.parametrize("link", [None, ""])
    def test_video_without_link(self, link):
        result = validate_interview_details(
            _interview(type="video", meeting_link=link), now=NOW
        )
        assert result.is_valid is False
        assert result.errors[0].field == "meeting_link"
        assert "Meeting link is required" in result.errors[0].message

    def test_phone_without_link(self):
        result = validate_interview_details(_interview(type="phone"), now=NOW)
        assert result.is_valid is True

    def test_date_must_be_strictly_future(self):
        result = validate_interview_details(_interview(date=NOW), now=NOW)
        assert result.is_valid is False
        assert result.errors[0].message == "Interview date must be in the future"

    def test_aware_date_compared_in_utc(self):
        # 13:00 at UTC+2 is 11:00 UTC, one hour before NOW
        aware = datetime(2026, 10, 19, 13, 0, tzinfo=timezone(timedelta(hours=2)))
        result = validate_interview_details(_interview(date=aware), now=NOW)
        assert result.is_valid is False

    def test_blank_time(self):
        result = validate_interview_details(_interview(time="   "), now=NOW)
        assert [e.field for e in result.errors] == ["time"]

    def test_collects_all_errors(self):
        result = validate_interview_details(
            _interview(date=NOW - timedelta(days=1), type="video"), now=NOW
        )
        assert {e.field for e in result.errors} == {"date", "meeting_link"}


class TestValidateRating:
    """Tests for rating validation."""

    @pytest.mark.parametrize("rating", [1, 3, 5])
    def test_in_range(self, rating):
        assert validate_rating(rating).is_valid is True

    def test_missing(self):
        result = validate_rating(None)
        assert result.errors[0].message == "Rating is required"

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range(self, rating):
        assert validate_rating(rating).is_valid is False
