# Exports all routers for easy importing
from .chat import router as chat_router
from .job_descriptions import router as job_descriptions_router
from .system import router as system_router

__all__ = ["chat_router", "job_descriptions_router", "system_router"]
