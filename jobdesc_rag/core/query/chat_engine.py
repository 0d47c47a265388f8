import logging
import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from langchain_core.documents import Document

from jobdesc_rag.core.llm import ChatCompletionClient
from jobdesc_rag.models.chat_models import ChatMessage, ChatResponse, DocumentSource
from jobdesc_rag.models.enums import ChatRole
from jobdesc_rag.utils.helpers import truncate_text
from jobdesc_rag.utils.logging import CorrelationLogger

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions about job descriptions. "
    "Use the provided job description context to answer the user's question. "
    "If the context doesn't contain relevant information, say so politely. "
    "Always be specific and reference the job titles and companies when relevant. "
    "Keep your responses concise and helpful."
)

NO_SOURCES_CONTEXT = "No relevant job descriptions found."

FALLBACK_ANSWER = "I'm sorry, I encountered an error while processing your question. Please try again."


def _to_source(document: Document, score: float, excerpt_length: int) -> DocumentSource:
    metadata = document.metadata or {}
    description = metadata.get("Description") or document.page_content
    return DocumentSource(
        id=str(metadata.get("Id", "")),
        title=metadata.get("Title", ""),
        company=metadata.get("Company", ""),
        location=metadata.get("Location"),
        excerpt=truncate_text(description, excerpt_length),
        score=float(score),
    )


def format_sources_for_context(sources: Sequence[DocumentSource]) -> str:
    """
    Format retrieved sources into the grounding block sent to the model.

    An empty result is stated explicitly rather than left blank.
    """
    if not sources:
        return NO_SOURCES_CONTEXT

    context = ""
    for i, source in enumerate(sources, start=1):
        context += f"Job {i}:\n"
        context += f"Title: {source.title}\n"
        context += f"Company: {source.company}\n"
        context += f"Location: {source.location or ''}\n"
        context += f"Description: {source.excerpt or ''}\n\n"
    return context


def build_messages(message: str, history: Sequence[ChatMessage], context: str) -> List[Dict[str, str]]:
    """System instruction, then prior turns in order, then the grounded question."""
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]

    for turn in history:
        role = turn.chat_role
        if role == ChatRole.UNRECOGNIZED:
            continue
        messages.append({"role": role.value, "content": turn.content})

    messages.append({
        "role": "user",
        "content": f"Context from job descriptions:\n{context}\n\nUser question: {message}",
    })
    return messages


class RagChatEngine:
    """
    Answers questions from indexed job descriptions.

    Retrieval and generation failures never escape ``chat``: a failed search
    is treated as zero sources and a failed model call yields a fixed
    apology that still carries whatever sources were found.
    """

    def __init__(
        self,
        store,
        chat_client: ChatCompletionClient,
        top_k: int = 5,
        excerpt_length: int = 200,
    ):
        self.store = store
        self.chat_client = chat_client
        self.top_k = top_k
        self.excerpt_length = excerpt_length

    def retrieve(self, query: str, log=None) -> List[DocumentSource]:
        log = log or logger
        try:
            results: List[Tuple[Document, float]] = self.store.similarity_search_with_score(query, k=self.top_k)
            sources = [_to_source(doc, score, self.excerpt_length) for doc, score in results[:self.top_k]]
        except Exception as e:
            log.error(f"Error searching for relevant jobs: {str(e)}", exc_info=True)
            return []

        log.info(f"Found {len(sources)} relevant jobs")
        return sources

    def generate(self, message: str, history: Sequence[ChatMessage], sources: Sequence[DocumentSource], log=None) -> str:
        log = log or logger
        context = format_sources_for_context(sources)
        messages = build_messages(message, history, context)

        try:
            return self.chat_client.complete(messages)
        except Exception as e:
            log.error(f"Error generating chat response: {str(e)}", exc_info=True)
            return FALLBACK_ANSWER

    def chat(self, message: str, history: Optional[Sequence[ChatMessage]] = None) -> ChatResponse:
        conversation_id = str(uuid.uuid4())
        log = CorrelationLogger(logger, conversation_id)
        log.info("Processing chat request")

        sources = self.retrieve(message, log=log)
        answer = self.generate(message, history or [], sources, log=log)

        return ChatResponse(response=answer, sources=sources, conversation_id=conversation_id)
