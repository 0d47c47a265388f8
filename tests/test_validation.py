"""
Tests for submission and chat request validation.
"""

import pytest

from jobdesc_rag.core.exceptions import SubmissionValidationError
from jobdesc_rag.core.validation import SubmissionValidator, validate_chat_request
from jobdesc_rag.models.chat_models import ChatRequest
from jobdesc_rag.models.job_models import JobDescriptionSubmission


@pytest.fixture
def validator() -> SubmissionValidator:
    return SubmissionValidator()


def test_valid_submission_is_trimmed(validator):
    result = validator.validate(JobDescriptionSubmission(
        title="  Data Engineer ",
        company=" Contoso",
        description="Pipelines.  ",
        location="   ",
    ))

    assert result.is_valid
    assert result.submission.title == "Data Engineer"
    assert result.submission.company == "Contoso"
    assert result.submission.description == "Pipelines."
    assert result.submission.location is None


def test_missing_required_fields_reported_in_order(validator):
    result = validator.validate(JobDescriptionSubmission(title=" ", company=None, description=""))

    assert not result.is_valid
    assert result.submission is None
    assert result.errors == [
        "Title is required",
        "Company is required",
        "Description is required",
    ]


def test_length_limits(validator):
    result = validator.validate(JobDescriptionSubmission(
        title="t" * 201,
        company="c" * 101,
        description="d" * 10001,
        location="l" * 101,
        workday_id="w" * 51,
    ))

    assert result.errors == [
        "Title cannot exceed 200 characters",
        "Company name cannot exceed 100 characters",
        "Description cannot exceed 10,000 characters",
        "Location cannot exceed 100 characters",
        "WorkdayId cannot exceed 50 characters",
    ]


def test_fields_at_their_limits_are_accepted(validator):
    result = validator.validate(JobDescriptionSubmission(
        title="t" * 200,
        company="c" * 100,
        description="d" * 10000,
        location="l" * 100,
        workday_id="w" * 50,
    ))

    assert result.is_valid


def test_validate_or_raise(validator):
    with pytest.raises(SubmissionValidationError) as exc_info:
        validator.validate_or_raise(JobDescriptionSubmission(company="Contoso", description="x"))

    assert exc_info.value.errors == ["Title is required"]


@pytest.mark.parametrize("message, expected", [
    (None, ["Message is required"]),
    ("   ", ["Message is required"]),
    ("m" * 1001, ["Message cannot exceed 1000 characters"]),
    ("m" * 1000, []),
    ("What data roles are open?", []),
])
def test_chat_request_validation(message, expected):
    assert validate_chat_request(ChatRequest(message=message)) == expected
