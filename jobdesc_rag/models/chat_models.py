from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jobdesc_rag.models.enums import ChatRole
from jobdesc_rag.utils.helpers import utc_now


class ChatMessage(BaseModel):
    """A single prior turn supplied by the caller."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    role: str = ""
    content: str = ""
    timestamp: datetime = Field(default_factory=utc_now)

    @property
    def chat_role(self) -> ChatRole:
        return ChatRole.from_value(self.role)


class ChatRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: Optional[str] = None
    history: List[ChatMessage] = Field(default_factory=list)


class DocumentSource(BaseModel):
    """A retrieved job description surfaced to the chat caller as a citation."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str
    company: str
    location: Optional[str] = None
    excerpt: Optional[str] = None
    score: float = 0.0


class ChatResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    response: str
    sources: List[DocumentSource] = Field(default_factory=list)
    conversation_id: str
