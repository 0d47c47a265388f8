"""
Lazily created, process-wide collaborators for the ingestion workers.

Workers import actors at boot but only touch Qdrant, the embedding model
and the chat client once a message actually arrives.
"""

import logging
from typing import Optional

from langchain_core.embeddings import Embeddings
from qdrant_client import QdrantClient

from jobdesc_rag.config.settings import settings

logger = logging.getLogger(__name__)

_EMBEDDING_FUNCTION: Optional[Embeddings] = None
_VECTOR_STORE = None


def get_qdrant_client() -> QdrantClient:
    if settings.qdrant_url:
        return QdrantClient(url=settings.qdrant_url)
    return QdrantClient(host=settings.qdrant_host, port=settings.qdrant_port)


def get_embedding_function() -> Embeddings:
    global _EMBEDDING_FUNCTION

    if _EMBEDDING_FUNCTION is None:
        logger.info(f"Loading embedding model {settings.embedding_model} on {settings.device}")
        _EMBEDDING_FUNCTION = settings.embedding_function
    return _EMBEDDING_FUNCTION


def get_vector_store():
    """Get the shared vector store, creating the collection on first use."""
    global _VECTOR_STORE

    from jobdesc_rag.core.vectorstore import QdrantStore

    if _VECTOR_STORE is None:
        _VECTOR_STORE = QdrantStore(
            client=get_qdrant_client(),
            collection_name=settings.qdrant_collection,
            embedding_function=get_embedding_function(),
        )
    return _VECTOR_STORE


def reset_models() -> None:
    global _EMBEDDING_FUNCTION, _VECTOR_STORE
    _EMBEDDING_FUNCTION = None
    _VECTOR_STORE = None
