from enum import Enum
from typing import Optional


# ============================================================================
# Chat Enums
# ============================================================================

class ChatRole(str, Enum):
    """Roles a caller may attach to a history turn."""
    USER = "user"
    ASSISTANT = "assistant"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "ChatRole":
        """Map a caller-supplied role string, case-insensitively."""
        if not value:
            return cls.UNRECOGNIZED

        normalized = value.strip().lower()
        if normalized == cls.USER.value:
            return cls.USER
        if normalized == cls.ASSISTANT.value:
            return cls.ASSISTANT
        return cls.UNRECOGNIZED


# ============================================================================
# Ingestion Enums
# ============================================================================

class IngestionState(str, Enum):
    """States a single queue delivery moves through in the ingestion worker."""
    RECEIVED = "received"
    PAYLOAD_VALIDATED = "payload_validated"
    DEDUP_CHECKED = "dedup_checked"
    INDEXED = "indexed"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED = "failed"


class DedupOutcome(str, Enum):
    """Result of a duplicate check."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    CHECK_FAILED = "check_failed"


class MatchStrategy(str, Enum):
    """Which duplicate check produced a match."""
    EXACT_KEY = "exact_key"
    TITLE_AND_COMPANY = "title_and_company"
    EXTERNAL_ID = "external_id"
