"""Structured logging configuration for llmforge."""

import logging
import sys
from typing import Optional

from json_log_formatter import JSONFormatter


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    transformer_name: Optional[str] = None,
) -> None:
    """Configure logging for llmforge.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use normal format
        transformer_name: Optional transformer name added to every record
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("llmforge")
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = StructuredFormatter()

    handler.setFormatter(formatter)
    if transformer_name:
        handler.addFilter(_TransformerNameFilter(transformer_name))
    logger.addHandler(handler)


class _TransformerNameFilter(logging.Filter):
    def __init__(self, transformer_name: str):
        super().__init__()
        self.transformer_name = transformer_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "transformer_name"):
            record.transformer_name = self.transformer_name
        return True


class StructuredFormatter(logging.Formatter):
    """Structured formatter that adds context to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        context = getattr(record, "context", {})

        parts = [f"[{record.levelname}]"]

        if hasattr(record, "transformer_name"):
            parts.append(f"transformer={record.transformer_name}")

        if hasattr(record, "item"):
            parts.append(f"item={record.item}")

        for key, value in context.items():
            parts.append(f"{key}={value}")

        parts.append(record.getMessage())

        message = " ".join(parts)
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message
