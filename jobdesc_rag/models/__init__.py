"""
Data models for submissions, queue envelopes, index documents and chat.
"""

from .enums import ChatRole, DedupOutcome, IngestionState, MatchStrategy
from .job_models import (
    JobDescriptionDocument,
    JobDescriptionMessage,
    JobDescriptionPage,
    JobDescriptionSubmission,
    MessageResponse,
    SubmissionAcceptedResponse,
)
from .chat_models import ChatMessage, ChatRequest, ChatResponse, DocumentSource

__all__ = [
    # Enums
    "ChatRole",
    "DedupOutcome",
    "IngestionState",
    "MatchStrategy",

    # Job description models
    "JobDescriptionDocument",
    "JobDescriptionMessage",
    "JobDescriptionPage",
    "JobDescriptionSubmission",
    "MessageResponse",
    "SubmissionAcceptedResponse",

    # Chat models
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "DocumentSource",
]
