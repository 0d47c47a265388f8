"""
Field-level validation for job description submissions and chat requests.

Validators never auto-correct beyond trimming whitespace: every violated
constraint is reported back to the caller, in field order.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from jobdesc_rag.core.exceptions import SubmissionValidationError
from jobdesc_rag.models.chat_models import ChatRequest
from jobdesc_rag.models.job_models import JobDescriptionSubmission

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
COMPANY_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 10000
LOCATION_MAX_LENGTH = 100
WORKDAY_ID_MAX_LENGTH = 50
CHAT_MESSAGE_MAX_LENGTH = 1000


@dataclass(frozen=True)
class ValidationResult:
    submission: Optional[JobDescriptionSubmission] = None
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _trimmed(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SubmissionValidator:
    """Presence and length rules for a raw submission."""

    def validate(self, submission: JobDescriptionSubmission) -> ValidationResult:
        title = _trimmed(submission.title)
        company = _trimmed(submission.company)
        description = _trimmed(submission.description)
        location = _trimmed(submission.location)
        workday_id = _trimmed(submission.workday_id)

        errors: List[str] = []

        if title is None:
            errors.append("Title is required")
        elif len(title) > TITLE_MAX_LENGTH:
            errors.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

        if company is None:
            errors.append("Company is required")
        elif len(company) > COMPANY_MAX_LENGTH:
            errors.append(f"Company name cannot exceed {COMPANY_MAX_LENGTH} characters")

        if description is None:
            errors.append("Description is required")
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH:,} characters")

        if location is not None and len(location) > LOCATION_MAX_LENGTH:
            errors.append(f"Location cannot exceed {LOCATION_MAX_LENGTH} characters")

        if workday_id is not None and len(workday_id) > WORKDAY_ID_MAX_LENGTH:
            errors.append(f"WorkdayId cannot exceed {WORKDAY_ID_MAX_LENGTH} characters")

        if errors:
            logger.warning(f"Job description submission rejected: {errors}")
            return ValidationResult(errors=errors)

        normalized = JobDescriptionSubmission(
            title=title,
            company=company,
            description=description,
            location=location,
            posting_date=submission.posting_date,
            workday_id=workday_id,
        )
        return ValidationResult(submission=normalized)

    def validate_or_raise(self, submission: JobDescriptionSubmission) -> JobDescriptionSubmission:
        result = self.validate(submission)
        if not result.is_valid:
            raise SubmissionValidationError(result.errors)
        return result.submission


def validate_chat_request(request: ChatRequest) -> List[str]:
    """Return the violated constraints of a chat request (empty when valid)."""
    message = request.message
    if message is None or not message.strip():
        return ["Message is required"]
    if len(message) > CHAT_MESSAGE_MAX_LENGTH:
        return [f"Message cannot exceed {CHAT_MESSAGE_MAX_LENGTH} characters"]
    return []
