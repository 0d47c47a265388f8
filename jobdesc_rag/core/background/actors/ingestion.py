"""
Ingestion actor consumed by the dramatiq workers.

Run with::

    dramatiq jobdesc_rag.core.background.actors
"""

import logging

import dramatiq

from jobdesc_rag.config.settings import settings
from jobdesc_rag.core.background.common import broker
from jobdesc_rag.core.background.models import get_vector_store
from jobdesc_rag.core.ingestion.dedup import DuplicateChecker
from jobdesc_rag.core.ingestion.indexer import DocumentIndexer
from jobdesc_rag.core.ingestion.worker import IngestionWorker

logger = logging.getLogger(__name__)


def build_ingestion_worker(store=None) -> IngestionWorker:
    """Assemble a request-scoped worker around the shared store."""
    store = store or get_vector_store()
    return IngestionWorker(
        checker=DuplicateChecker(store),
        indexer=DocumentIndexer(
            store,
            max_attempts=settings.index_max_attempts,
            base_delay=settings.index_base_delay_seconds,
        ),
    )


@dramatiq.actor(
    broker=broker,
    queue_name=settings.ingestion_queue_name,
    max_retries=settings.ingestion_max_retries,
    min_backoff=settings.ingestion_min_backoff_ms,
    max_backoff=settings.ingestion_max_backoff_ms,
    time_limit=settings.ingestion_time_limit_ms,
)
def process_job_description(message_json: str):
    """
    Process one job description envelope.

    Exceptions propagate so the Retries middleware counts the attempt and
    dead-letters the message once retries are exhausted.
    """
    state = build_ingestion_worker().process(message_json)
    return state.value
