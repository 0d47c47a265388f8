#!/usr/bin/env python3
"""
Complete system reset: drops the job description collection and clears the
ingestion queue together with its delayed and dead-lettered messages.
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import redis
from qdrant_client import QdrantClient

from jobdesc_rag.config.settings import settings
from jobdesc_rag.core.background.common import BROKER_NAMESPACE
from jobdesc_rag.core.background.models import get_qdrant_client
from jobdesc_rag.utils.logging import setup_logger

logger = logging.getLogger("reset_system")


def clear_qdrant_collection(client: QdrantClient) -> bool:
    """Delete the Qdrant collection (recreated by the API or workers on next start)."""
    logger.info("Clearing Qdrant vector store...")

    try:
        collection_names = [c.name for c in client.get_collections().collections]

        if settings.qdrant_collection in collection_names:
            client.delete_collection(settings.qdrant_collection)
            logger.info(f"Deleted collection {settings.qdrant_collection}")
        else:
            logger.info(f"Collection {settings.qdrant_collection} doesn't exist")
        return True

    except Exception as e:
        logger.error(f"Error clearing Qdrant: {str(e)}")
        return False


def clear_ingestion_queue(redis_client: redis.Redis) -> bool:
    """Delete the queue, its delay queue and dead letters from Redis."""
    logger.info("Clearing ingestion queue...")

    try:
        pattern = f"{BROKER_NAMESPACE}:{settings.ingestion_queue_name}*"
        keys = list(redis_client.scan_iter(match=pattern))
        if keys:
            deleted = redis_client.delete(*keys)
            logger.info(f"Deleted {deleted} keys matching {pattern}")
        else:
            logger.info(f"No keys match {pattern}")
        return True

    except redis.RedisError as e:
        logger.error(f"Error clearing Redis: {str(e)}")
        return False


def main():
    setup_logger("reset_system", level=settings.log_level)

    print("COMPLETE SYSTEM RESET")
    print("=" * 50)
    print("This will delete:")
    print(f"  - The Qdrant collection '{settings.qdrant_collection}'")
    print(f"  - All pending, delayed and dead-lettered messages on '{settings.ingestion_queue_name}'")
    print("")

    confirm = input("Are you sure you want to proceed? Type 'YES' to confirm: ")
    if confirm != "YES":
        print("Operation cancelled")
        return

    redis_client = redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password,
    )

    results = [
        clear_qdrant_collection(get_qdrant_client()),
        clear_ingestion_queue(redis_client),
    ]

    if all(results):
        logger.info("System reset complete")
    else:
        logger.warning(f"System reset finished with {results.count(False)} failed step(s)")


if __name__ == "__main__":
    main()
