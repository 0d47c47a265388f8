"""
Logging utility functions for the job description RAG system.
"""

import logging
import os
import sys
from typing import Any, MutableMapping, Optional, Tuple, Union

DEFAULT_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"


def setup_logger(
    name: str = "jobdesc_rag",
    level: Union[int, str] = "INFO",
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Name of the logger
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (if None, no file logging)
        log_to_console: Whether to log to console
        log_format: Custom log format (if None, use default format)

    Returns:
        Configured logger instance
    """
    # Convert string level to logging level if needed
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


class CorrelationLogger(logging.LoggerAdapter):
    """
    Prefixes every message with ``[<correlation id>]`` so that one queue
    delivery or chat request can be followed through the logs.
    """

    def __init__(self, logger: logging.Logger, correlation_id: str):
        super().__init__(logger, {"correlation_id": correlation_id})

    @property
    def correlation_id(self) -> str:
        return self.extra["correlation_id"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.correlation_id}] {msg}", kwargs
