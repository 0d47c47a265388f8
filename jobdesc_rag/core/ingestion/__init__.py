"""
Asynchronous ingestion pipeline: publish, dedup, index.
"""

from .dedup import DedupResult, DuplicateChecker
from .indexer import DocumentIndexer
from .publisher import QueuePublisher
from .worker import IngestionWorker

__all__ = [
    "DedupResult",
    "DocumentIndexer",
    "DuplicateChecker",
    "IngestionWorker",
    "QueuePublisher",
]
