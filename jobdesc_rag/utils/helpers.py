import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

__all__ = [
    "truncate_text",
    "new_correlation_id",
    "utc_now",
    "normalize_keys",
    "is_blank",
]

ELLIPSIS = "..."


def truncate_text(text: Optional[str], max_length: int) -> Optional[str]:
    """
    Truncate text to ``max_length`` characters, ending with an ellipsis marker.

    Text at or under the limit is returned unmodified. The marker counts
    toward the limit, so a truncated result is exactly ``max_length`` long.
    """
    if not text or len(text) <= max_length:
        return text

    return text[:max_length - len(ELLIPSIS)] + ELLIPSIS


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def normalize_keys(data: Any) -> Any:
    """
    Recursively lower-case dictionary keys and drop underscores.

    Used to read JSON written by publishers that disagree on property
    casing (``PostingDate``, ``postingDate`` and ``posting_date`` all map
    to ``postingdate``).
    """
    if isinstance(data, dict):
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            normalized[str(key).replace("_", "").lower()] = normalize_keys(value)
        return normalized
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    return data
