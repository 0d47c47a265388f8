"""
Exception hierarchy for the job description RAG system.

Validation errors are caller-correctable and never retried. Ingestion errors
are fatal for one queue delivery and are re-raised out of the actor so the
broker's retry and dead-letter policy decides what happens next.
"""

from typing import List, Optional


class JobDescriptionRAGError(Exception):
    """Base class for all errors raised by this package."""


class SubmissionValidationError(JobDescriptionRAGError):
    """A submission or chat request violated one or more field constraints."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class StoreError(JobDescriptionRAGError):
    """A request against the document index failed."""


class DocumentNotFoundError(JobDescriptionRAGError):
    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Job description {document_id} not found")


class IngestionError(JobDescriptionRAGError):
    """Fatal for the current delivery; the broker retries or dead-letters."""


class MalformedMessageError(IngestionError):
    """The queue message body is not a structurally valid envelope."""


class InvalidPayloadError(IngestionError):
    def __init__(self, field: str, message_id: Optional[str] = None):
        self.field = field
        self.message_id = message_id
        super().__init__(f"{field} is required")


class IndexingError(IngestionError):
    def __init__(self, document_id: str, attempts: int, reason: Optional[str] = None):
        self.document_id = document_id
        self.attempts = attempts
        message = f"Failed to index document {document_id} after {attempts} attempts"
        if reason:
            message += f": {reason}"
        super().__init__(message)
