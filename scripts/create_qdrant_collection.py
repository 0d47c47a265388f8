"""
Create the job description collection and its payload indexes.

Usage:
    python scripts/create_qdrant_collection.py [--recreate]
"""

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jobdesc_rag.config.settings import settings
from jobdesc_rag.core.background.models import get_embedding_function, get_qdrant_client
from jobdesc_rag.core.vectorstore import QdrantStore
from jobdesc_rag.utils.logging import setup_logger

logger = logging.getLogger("create_qdrant_collection")


def main():
    parser = argparse.ArgumentParser(description="Create the job description Qdrant collection")
    parser.add_argument("--collection", default=settings.qdrant_collection, help="Collection name")
    parser.add_argument("--recreate", action="store_true", help="Drop the collection first if it exists")
    args = parser.parse_args()

    setup_logger("create_qdrant_collection", level=settings.log_level)

    client = get_qdrant_client()
    existing = [c.name for c in client.get_collections().collections]

    if args.collection in existing:
        if not args.recreate:
            logger.info(f"Collection {args.collection} already exists")
            return
        logger.info(f"Deleting collection {args.collection}")
        client.delete_collection(args.collection)

    store = QdrantStore(
        client=client,
        collection_name=args.collection,
        embedding_function=get_embedding_function(),
    )
    logger.info(f"Collection ready: {store.get_stats().get('status')}")


if __name__ == "__main__":
    main()
