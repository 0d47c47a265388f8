"""
JobDescriptionService - intake, listing and deletion of job descriptions.
Intake only validates and enqueues; indexing happens in the ingestion workers.
"""

import logging
from typing import Optional, Union

from jobdesc_rag.core.exceptions import DocumentNotFoundError, SubmissionValidationError
from jobdesc_rag.core.ingestion.publisher import QueuePublisher
from jobdesc_rag.core.validation import SubmissionValidator
from jobdesc_rag.models.job_models import JobDescriptionPage, JobDescriptionSubmission
from jobdesc_rag.utils.helpers import is_blank

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


def _parse_int(value: Union[int, str, None]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_paging(page_number: Union[int, str, None], page_size: Union[int, str, None]):
    """Unparsable or out-of-range paging parameters fall back to their defaults."""
    page_number = _parse_int(page_number)
    page_size = _parse_int(page_size)
    if page_number is None or page_number < 1:
        page_number = 1
    if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page_number, page_size


class JobDescriptionService:
    def __init__(self, store, publisher: QueuePublisher, validator: Optional[SubmissionValidator] = None):
        self.store = store
        self.publisher = publisher
        self.validator = validator or SubmissionValidator()

    def submit(self, submission: JobDescriptionSubmission) -> str:
        """
        Validate and enqueue a submission.

        Returns:
            The envelope id, which becomes the document id once indexed

        Raises:
            SubmissionValidationError: one or more field constraints failed
        """
        result = self.validator.validate(submission)
        if not result.is_valid:
            raise SubmissionValidationError(result.errors)

        message_id = self.publisher.publish(result.submission)
        logger.info(f"Job description {message_id} accepted for processing")
        return message_id

    def list_job_descriptions(
            self,
            page_number: Union[int, str, None] = None,
            page_size: Union[int, str, None] = None,
            search: Optional[str] = None,
    ) -> JobDescriptionPage:
        page_number, page_size = normalize_paging(page_number, page_size)
        skip = (page_number - 1) * page_size

        page = self.store.list_documents(search_text=search, size=page_size, skip=skip)
        logger.info(f"Retrieved {len(page.items)} of {page.total_count} job descriptions (page {page_number})")

        return JobDescriptionPage(
            total_count=page.total_count,
            page_size=page_size,
            page_number=page_number,
            items=page.items,
        )

    def delete(self, document_id: str) -> None:
        """
        Raises:
            SubmissionValidationError: the id is blank
            DocumentNotFoundError: no document has this id
        """
        if is_blank(document_id):
            raise SubmissionValidationError(["Job description ID is required"])

        if not self.store.delete_document(document_id.strip()):
            raise DocumentNotFoundError(document_id)

        logger.info(f"Job description {document_id} deleted")
