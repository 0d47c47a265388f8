from .chat_engine import FALLBACK_ANSWER, NO_SOURCES_CONTEXT, RagChatEngine

__all__ = ["FALLBACK_ANSWER", "NO_SOURCES_CONTEXT", "RagChatEngine"]
