import os
from typing import Optional

import torch
from langchain_huggingface import HuggingFaceEmbeddings
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    # API settings
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Redis / queue settings
    redis_host: str = os.getenv("REDIS_HOST", "localhost")
    redis_port: int = int(os.getenv("REDIS_PORT", "6379"))
    redis_password: Optional[str] = os.getenv("REDIS_PASSWORD")
    ingestion_queue_name: str = os.getenv("INGESTION_QUEUE_NAME", "job-descriptions")

    # Broker-side retry policy. The broker owns the attempt counter and
    # dead-letters the message once max_retries is exhausted.
    ingestion_max_retries: int = int(os.getenv("INGESTION_MAX_RETRIES", "5"))
    ingestion_min_backoff_ms: int = int(os.getenv("INGESTION_MIN_BACKOFF_MS", "1000"))
    ingestion_max_backoff_ms: int = int(os.getenv("INGESTION_MAX_BACKOFF_MS", "300000"))
    ingestion_time_limit_ms: int = int(os.getenv("INGESTION_TIME_LIMIT_MS", "120000"))
    dead_message_ttl_ms: int = int(os.getenv("DEAD_MESSAGE_TTL_MS", str(7 * 24 * 60 * 60 * 1000)))

    # Qdrant settings
    qdrant_url: Optional[str] = os.getenv("QDRANT_URL")
    qdrant_host: str = os.getenv("QDRANT_HOST", "localhost")
    qdrant_port: int = int(os.getenv("QDRANT_PORT", "6333"))
    qdrant_collection: str = os.getenv("QDRANT_COLLECTION", "job-descriptions")

    # Embedding settings
    embedding_model: str = os.getenv("EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
    embedding_batch_size: int = int(os.getenv("EMBEDDING_BATCH_SIZE", "8"))
    device: str = os.getenv("DEVICE", "cuda:0" if torch.cuda.is_available() else "cpu")

    # Language model settings
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    azure_openai_endpoint: Optional[str] = os.getenv("AZURE_OPENAI_ENDPOINT")
    azure_openai_api_version: str = os.getenv("AZURE_OPENAI_API_VERSION", "2024-06-01")
    openai_deployment_name: str = os.getenv("OPENAI_DEPLOYMENT_NAME", "gpt-4o-mini")
    chat_max_tokens: int = int(os.getenv("CHAT_MAX_TOKENS", "1000"))
    chat_temperature: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))

    # Chat retrieval settings
    chat_top_k: int = int(os.getenv("CHAT_TOP_K", "5"))
    excerpt_length: int = int(os.getenv("EXCERPT_LENGTH", "200"))

    # Indexer retry settings (waits 1s, then 2s)
    index_max_attempts: int = int(os.getenv("INDEX_MAX_ATTEMPTS", "3"))
    index_base_delay_seconds: float = float(os.getenv("INDEX_BASE_DELAY_SECONDS", "1.0"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE")
    environment: str = os.getenv("ENVIRONMENT", "development")

    @property
    def use_azure_openai(self) -> bool:
        return bool(self.azure_openai_endpoint)

    # Embedding function
    @property
    def embedding_function(self) -> HuggingFaceEmbeddings:
        try:
            return HuggingFaceEmbeddings(
                model_name=self.embedding_model,
                model_kwargs={"device": self.device},
                encode_kwargs={
                    "batch_size": self.embedding_batch_size,
                    "normalize_embeddings": True
                },
            )
        except Exception as e:
            raise ValueError(f"Failed to load embedding model {self.embedding_model}. Error: {str(e)}")

    def get_cors_origins(self) -> list:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def describe(self) -> dict:
        """Non-secret configuration summary for startup logs."""
        return {
            "environment": self.environment,
            "queue": self.ingestion_queue_name,
            "collection": self.qdrant_collection,
            "deployment": self.openai_deployment_name,
            "azure_openai": self.use_azure_openai,
            "embedding_model": self.embedding_model,
            "device": self.device,
        }

    # Model config
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()
