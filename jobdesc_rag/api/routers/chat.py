import logging

from fastapi import APIRouter, Depends

from jobdesc_rag.api.dependencies import get_chat_service
from jobdesc_rag.models.chat_models import ChatRequest, ChatResponse
from jobdesc_rag.services.chat_service import ChatService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """
    Answer a question from the indexed job descriptions.

    Prior turns are supplied by the caller on every request; nothing is kept
    server-side between calls.
    """
    logger.info(f"Chat request received ({len(request.history)} prior turns)")
    return service.chat(request)
