"""
Dramatiq broker configuration shared by the API (publisher side) and the
ingestion workers (consumer side).

The broker's Retries middleware owns the delivery attempt counter: an
actor that raises is redelivered with exponential backoff and, once
``max_retries`` is exhausted, the message is moved to the queue's
dead-letter set (``dramatiq:<queue>.XQ``).
"""

import logging
import os

import dramatiq
from dramatiq.brokers.redis import RedisBroker
from dramatiq.brokers.stub import StubBroker
from dramatiq.middleware import Middleware
from dramatiq.middleware.age_limit import AgeLimit
from dramatiq.middleware.callbacks import Callbacks
from dramatiq.middleware.pipelines import Pipelines
from dramatiq.middleware.retries import Retries
from dramatiq.middleware.shutdown import ShutdownNotifications
from dramatiq.middleware.time_limit import TimeLimit

from jobdesc_rag.config.settings import settings
from jobdesc_rag.utils.logging import setup_logger

logger = logging.getLogger(__name__)

BROKER_NAMESPACE = "dramatiq"


def _middleware():
    return [
        AgeLimit(),
        TimeLimit(time_limit=settings.ingestion_time_limit_ms),
        ShutdownNotifications(),
        Callbacks(),
        Pipelines(),
        Retries(
            max_retries=settings.ingestion_max_retries,
            min_backoff=settings.ingestion_min_backoff_ms,
            max_backoff=settings.ingestion_max_backoff_ms,
        ),
    ]


class WorkerSetup(Middleware):
    """Configures logging once per worker process."""

    def before_worker_boot(self, broker, worker):
        setup_logger(level=settings.log_level, log_file=settings.log_file)
        logger.info(f"Initializing ingestion worker {os.getpid()} with config {settings.describe()}")

    def after_worker_shutdown(self, broker, worker):
        logger.info(f"Ingestion worker {os.getpid()} shut down")


if os.environ.get("UNIT_TESTS") == "1":
    broker = StubBroker(middleware=_middleware())
    broker.emit_after("process_boot")
else:
    broker_kwargs = {
        "host": settings.redis_host,
        "port": settings.redis_port,
        "max_connections": 20,
        "dead_message_ttl": settings.dead_message_ttl_ms,
        "namespace": BROKER_NAMESPACE,
    }
    if settings.redis_password:
        broker_kwargs["password"] = settings.redis_password

    broker = RedisBroker(middleware=_middleware(), **broker_kwargs)

broker.add_middleware(WorkerSetup())
dramatiq.set_broker(broker)


def get_redis_client():
    """Get the Redis client from the broker."""
    return broker.client


def dead_letter_key(queue_name: str) -> str:
    """Sorted set of dead-lettered message ids, scored by time of death."""
    return f"{BROKER_NAMESPACE}:{queue_name}.XQ"


def dead_letter_messages_key(queue_name: str) -> str:
    """Hash of dead-lettered message id to encoded message."""
    return f"{dead_letter_key(queue_name)}.msgs"
