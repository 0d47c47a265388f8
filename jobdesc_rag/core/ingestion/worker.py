"""
Queue consumer for job description envelopes.

One call to ``process`` handles one delivery:

    RECEIVED -> PAYLOAD_VALIDATED -> DEDUP_CHECKED -> INDEXED | SKIPPED_DUPLICATE

Any failure is logged and re-raised. The broker counts the attempt,
redelivers with backoff and dead-letters once its retry budget is spent;
this class keeps no attempt state of its own. Because delivery is
at-least-once, the whole flow is safe to repeat for the same envelope:
the exact-key duplicate check runs before every index attempt.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from jobdesc_rag.core.exceptions import InvalidPayloadError
from jobdesc_rag.core.ingestion.dedup import DuplicateChecker
from jobdesc_rag.core.ingestion.indexer import DocumentIndexer
from jobdesc_rag.models.enums import IngestionState
from jobdesc_rag.models.job_models import JobDescriptionDocument, JobDescriptionMessage
from jobdesc_rag.utils.helpers import is_blank, new_correlation_id, utc_now
from jobdesc_rag.utils.logging import CorrelationLogger

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "company", "description")


class IngestionWorker:
    def __init__(
        self,
        checker: DuplicateChecker,
        indexer: DocumentIndexer,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.checker = checker
        self.indexer = indexer
        self.clock = clock

    def process(self, raw_message: Union[str, bytes, None], correlation_id: Optional[str] = None) -> IngestionState:
        log = CorrelationLogger(logger, correlation_id or new_correlation_id())
        state = IngestionState.RECEIVED
        log.info("Processing job description message")

        try:
            message = JobDescriptionMessage.from_json(raw_message)
            log.info(f"Received message {message.message_id}")

            self._validate_payload(message)
            state = IngestionState.PAYLOAD_VALIDATED

            document = JobDescriptionDocument.from_message(message, ingestion_time=self.clock())

            result = self.checker.check(document, log=log)
            state = IngestionState.DEDUP_CHECKED
            if result.is_duplicate:
                log.warning(f"Skipping duplicate job description {document.id} ({result.strategy.value})")
                return IngestionState.SKIPPED_DUPLICATE

            self.indexer.index(document, log=log)
            log.info(f"Successfully processed job description {document.id}")
            return IngestionState.INDEXED

        except Exception as e:
            log.error(
                f"Message {IngestionState.FAILED.value} after state {state.value}: {str(e)}",
                exc_info=True,
            )
            raise

    @staticmethod
    def _validate_payload(message: JobDescriptionMessage) -> None:
        payload = message.payload
        for field in REQUIRED_FIELDS:
            if is_blank(getattr(payload, field)):
                raise InvalidPayloadError(field.capitalize(), message_id=message.message_id)
