import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from jobdesc_rag.api.dependencies import get_system_service
from jobdesc_rag.services.system_service import SystemService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/hello", response_class=PlainTextResponse)
async def hello():
    return "hello"


@router.get("/health")
def health_check(service: SystemService = Depends(get_system_service)):
    """Component status for the vector store and Redis."""
    return service.get_health()
