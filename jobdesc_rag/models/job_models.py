import json
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel, to_pascal

from jobdesc_rag.core.exceptions import MalformedMessageError
from jobdesc_rag.utils.helpers import normalize_keys, utc_now


# ============================================================================
# Submission and Queue Envelope
# ============================================================================

class JobDescriptionSubmission(BaseModel):
    """
    A job posting as submitted by a client.

    Fields are deliberately loose here; presence and length rules live in
    ``SubmissionValidator`` so that violations come back as a list of
    field-level messages instead of a framework error.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    posting_date: Optional[datetime] = None
    workday_id: Optional[str] = None


class JobDescriptionMessage(BaseModel):
    """
    Queue envelope around a validated submission.

    The generated ``id`` is used as the transport message id and becomes the
    primary key of the indexed document, so every redelivery of the same
    envelope resolves to the same document.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: uuid.UUID
    timestamp: datetime
    payload: JobDescriptionSubmission

    @classmethod
    def create(cls, payload: JobDescriptionSubmission) -> "JobDescriptionMessage":
        return cls(id=uuid.uuid4(), timestamp=utc_now(), payload=payload)

    @property
    def message_id(self) -> str:
        return str(self.id)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: Union[str, bytes, None]) -> "JobDescriptionMessage":
        """
        Parse a queue message body, accepting property names in any casing.

        Raises:
            MalformedMessageError: body is not JSON, not an object, or lacks
                a valid id/timestamp.
        """
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedMessageError(f"Invalid JSON format: {str(e)}") from e

        if not isinstance(data, dict):
            raise MalformedMessageError("Message body must be a JSON object")

        data = normalize_keys(data)
        payload = data.get("payload") or {}
        if not isinstance(payload, dict):
            raise MalformedMessageError("Message payload must be a JSON object")

        try:
            return cls(
                id=data.get("id"),
                timestamp=data.get("timestamp"),
                payload=JobDescriptionSubmission(
                    title=payload.get("title"),
                    company=payload.get("company"),
                    description=payload.get("description"),
                    location=payload.get("location"),
                    posting_date=payload.get("postingdate"),
                    workday_id=payload.get("workdayid"),
                ),
            )
        except ValidationError as e:
            raise MalformedMessageError(f"Invalid message structure: {e.error_count()} error(s)") from e


# ============================================================================
# Search Document
# ============================================================================

class JobDescriptionDocument(BaseModel):
    """
    Denormalized record stored in the document index.

    Serialized with PascalCase field names, matching the index contract
    (``Id``, ``Title``, ``Company``, ``IngestionTime`` ...).
    """
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    id: str
    title: str
    company: str
    description: str
    location: Optional[str] = None
    posting_date: Optional[datetime] = None
    workday_id: Optional[str] = None
    ingestion_time: datetime

    @classmethod
    def from_message(
            cls,
            message: JobDescriptionMessage,
            ingestion_time: Optional[datetime] = None,
    ) -> "JobDescriptionDocument":
        """Build the document for an envelope; ingestion time is stamped now, not taken from the envelope."""
        payload = message.payload
        return cls(
            id=message.message_id,
            title=payload.title,
            company=payload.company,
            description=payload.description,
            location=payload.location,
            posting_date=payload.posting_date,
            workday_id=payload.workday_id,
            ingestion_time=ingestion_time or utc_now(),
        )

    def embedding_text(self) -> str:
        parts = [self.title, self.company, self.location, self.description]
        return "\n".join(part for part in parts if part)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "page_content": self.description,
            "metadata": self.model_dump(mode="json", by_alias=True),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "JobDescriptionDocument":
        metadata = (payload or {}).get("metadata") or {}
        return cls.model_validate(metadata)


# ============================================================================
# API Response Models
# ============================================================================

class SubmissionAcceptedResponse(BaseModel):
    """Returned once a submission is on the queue; indexing happens later."""
    id: str
    message: str = "Job description accepted for processing"


class JobDescriptionPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_count: int
    page_size: int
    page_number: int
    items: List[JobDescriptionDocument]


class MessageResponse(BaseModel):
    message: str
