from jobdesc_rag.utils.helpers import (
    is_blank,
    new_correlation_id,
    normalize_keys,
    truncate_text,
    utc_now,
)
from jobdesc_rag.utils.logging import CorrelationLogger, setup_logger

__all__ = [
    "is_blank",
    "new_correlation_id",
    "normalize_keys",
    "truncate_text",
    "utc_now",
    "CorrelationLogger",
    "setup_logger",
]
