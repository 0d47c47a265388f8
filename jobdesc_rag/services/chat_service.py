import logging

from jobdesc_rag.core.exceptions import SubmissionValidationError
from jobdesc_rag.core.query.chat_engine import RagChatEngine
from jobdesc_rag.core.validation import validate_chat_request
from jobdesc_rag.models.chat_models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, engine: RagChatEngine):
        self.engine = engine

    def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Raises:
            SubmissionValidationError: the message is blank or too long.
                Once validation passes this always returns a response.
        """
        errors = validate_chat_request(request)
        if errors:
            raise SubmissionValidationError(errors)

        return self.engine.chat(request.message, request.history)
