import logging
from typing import Optional

import redis
from fastapi import HTTPException
from qdrant_client import QdrantClient

from jobdesc_rag.config.settings import settings
from jobdesc_rag.core.llm import ChatCompletionClient
from jobdesc_rag.core.query.chat_engine import RagChatEngine
from jobdesc_rag.core.vectorstore import QdrantStore
from jobdesc_rag.services.chat_service import ChatService
from jobdesc_rag.services.job_description_service import JobDescriptionService
from jobdesc_rag.services.system_service import SystemService

logger = logging.getLogger(__name__)

# Global instances
redis_client: Optional[redis.Redis] = None
qdrant_client: Optional[QdrantClient] = None
vector_store: Optional[QdrantStore] = None
chat_client: Optional[ChatCompletionClient] = None

# Service instances
job_description_service: Optional[JobDescriptionService] = None
chat_service: Optional[ChatService] = None
system_service: Optional[SystemService] = None


def init_vector_store() -> QdrantStore:
    """Initialize Qdrant client and vector store."""
    global qdrant_client, vector_store

    if qdrant_client is None:
        logger.info("Initializing Qdrant client...")
        if settings.qdrant_url:
            qdrant_client = QdrantClient(url=settings.qdrant_url)
        else:
            qdrant_client = QdrantClient(host=settings.qdrant_host, port=settings.qdrant_port)

    if vector_store is None:
        logger.info(f"Initializing vector store for collection {settings.qdrant_collection}...")
        vector_store = QdrantStore(
            client=qdrant_client,
            collection_name=settings.qdrant_collection,
            embedding_function=settings.embedding_function,
        )
        logger.info("Vector store initialized")
    return vector_store


def init_redis_client() -> Optional[redis.Redis]:
    """Initialize the Redis client used for health checks and dead-letter inspection."""
    global redis_client

    if redis_client is None:
        redis_kwargs = {
            "host": settings.redis_host,
            "port": settings.redis_port,
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
            "retry_on_timeout": True,
        }
        if settings.redis_password:
            redis_kwargs["password"] = settings.redis_password

        try:
            client = redis.Redis(**redis_kwargs)
            client.ping()
            redis_client = client
            logger.info("Redis client initialized")
        except redis.RedisError as e:
            logger.error(f"Failed to initialize Redis client: {e}")
            redis_client = None
    return redis_client


def init_chat_client() -> ChatCompletionClient:
    global chat_client

    if chat_client is None:
        chat_client = ChatCompletionClient.from_settings(settings)
    return chat_client


def init_system_service() -> SystemService:
    global system_service

    if system_service is None:
        system_service = SystemService(store=init_vector_store(), redis_client=init_redis_client())
    return system_service


def init_services() -> None:
    """Initialize all service layer components."""
    global job_description_service, chat_service

    # Health reporting must not depend on the language model credentials
    init_system_service()
    store = init_vector_store()

    if job_description_service is None:
        # Importing the actor registers it with the configured broker
        from jobdesc_rag.core.background.actors.ingestion import process_job_description
        from jobdesc_rag.core.ingestion.publisher import QueuePublisher

        job_description_service = JobDescriptionService(
            store=store,
            publisher=QueuePublisher(process_job_description),
        )
        logger.info("Job description service initialized")

    if chat_service is None:
        engine = RagChatEngine(
            store=store,
            chat_client=init_chat_client(),
            top_k=settings.chat_top_k,
            excerpt_length=settings.excerpt_length,
        )
        chat_service = ChatService(engine)
        logger.info("Chat service initialized")


def load_all_components() -> None:
    """Initialize all components at application startup."""
    logger.info("Initializing API service components...")
    init_redis_client()
    init_services()
    logger.info("API service initialization complete")


# Service dependencies
def get_job_description_service() -> JobDescriptionService:
    if job_description_service is None:
        init_services()
    if job_description_service is None:
        raise HTTPException(status_code=500, detail="Job description service not available")
    return job_description_service


def get_chat_service() -> ChatService:
    if chat_service is None:
        init_services()
    if chat_service is None:
        raise HTTPException(status_code=500, detail="Chat service not available")
    return chat_service


def get_system_service() -> SystemService:
    if system_service is None:
        init_system_service()
    if system_service is None:
        raise HTTPException(status_code=500, detail="System service not available")
    return system_service
