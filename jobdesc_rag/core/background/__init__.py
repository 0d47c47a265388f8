"""
Background infrastructure: broker configuration and worker-side models.
Actors live in ``jobdesc_rag.core.background.actors``.
"""

from .common import broker, dead_letter_key, dead_letter_messages_key, get_redis_client
from .models import get_embedding_function, get_qdrant_client, get_vector_store, reset_models

__all__ = [
    # Infrastructure
    "broker",
    "dead_letter_key",
    "dead_letter_messages_key",
    "get_redis_client",

    # Model management
    "get_embedding_function",
    "get_qdrant_client",
    "get_vector_store",
    "reset_models",
]
