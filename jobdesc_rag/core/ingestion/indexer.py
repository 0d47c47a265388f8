import logging
import time
from typing import Callable, Optional

from jobdesc_rag.core.exceptions import IndexingError, StoreError
from jobdesc_rag.models.job_models import JobDescriptionDocument

logger = logging.getLogger(__name__)


class DocumentIndexer:
    """
    Upserts one document with bounded retry.

    The wait before attempt ``n + 1`` is ``base_delay * 2 ** (n - 1)``
    seconds; there is no wait after the last attempt.
    """

    def __init__(
        self,
        store,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        return self.base_delay * (2 ** (attempt - 1))

    def index(self, document: JobDescriptionDocument, log=None) -> None:
        """
        Raises:
            IndexingError: every attempt failed
        """
        log = log or logger
        last_reason: Optional[str] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                results = self.store.upsert_documents([document])
                failed = [result for result in results if not result.succeeded]

                if results and not failed:
                    log.info(f"Successfully indexed document {document.id} on attempt {attempt}")
                    return

                last_reason = "; ".join(
                    f"{result.document_id}: {result.error_message}" for result in failed
                ) or "empty batch result"
                log.warning(f"Indexing attempt {attempt} failed for document {document.id}: {last_reason}")

            except StoreError as e:
                last_reason = str(e)
                log.warning(f"Request failed on attempt {attempt} for document {document.id}: {last_reason}")

            if attempt < self.max_attempts:
                delay = self.backoff_delay(attempt)
                log.info(f"Retrying document {document.id} in {delay:.1f}s")
                self.sleep(delay)

        log.error(f"Failed to index document {document.id} after {self.max_attempts} attempts")
        raise IndexingError(document.id, self.max_attempts, last_reason)
