import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class SystemService:
    """Component health for the API's /health endpoint."""

    def __init__(self, store, redis_client=None):
        self.store = store
        self.redis_client = redis_client

    def get_health(self) -> Dict[str, Any]:
        try:
            self.store.get_stats()
            vector_health = "healthy"
        except Exception as e:
            logger.error(f"Error getting vector store stats: {str(e)}")
            vector_health = "unhealthy"

        if self.redis_client is None:
            redis_health = "unavailable"
        else:
            try:
                self.redis_client.ping()
                redis_health = "healthy"
            except Exception as e:
                logger.error(f"Redis health check failed: {str(e)}")
                redis_health = "unhealthy"

        component_statuses = [vector_health, redis_health]
        if "unhealthy" in component_statuses:
            system_health = "unhealthy"
        elif "unavailable" in component_statuses:
            system_health = "degraded"
        else:
            system_health = "healthy"

        return {
            "status": system_health,
            "components": {
                "vector_store": vector_health,
                "redis": redis_health,
            },
        }
