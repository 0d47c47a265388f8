"""
Service layer used by the API routers.
"""

from .chat_service import ChatService
from .job_description_service import JobDescriptionService
from .system_service import SystemService

__all__ = ["ChatService", "JobDescriptionService", "SystemService"]
