"""Structured logging configuration for the Magic 8 Ball service."""

import logging
import sys
from typing import Optional, TextIO
from contextvars import ContextVar


# Context variable for request ID tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

REQUEST_LOG_NAME = "magic8ball.requests"
DIVIDER = "-" * 100


class StructuredFormatter(logging.Formatter):
    """Custom formatter that adds request ID and structured fields to log records."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with structured fields.

        Adds request_id from context if available and a [Q:n] tag for
        records logged with a question_number extra.
        """
        request_id = request_id_var.get()
        if request_id:
            record.request_id = request_id
        else:
            record.request_id = "no-request-id"

        # Tag lines logged for a specific question
        question_number = getattr(record, "question_number", None)
        record.question_tag = f"[Q:{question_number}] " if question_number else ""

        return super().format(record)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    formatter = StructuredFormatter(
        fmt='%(asctime)s - [%(request_id)s] - %(name)s - %(levelname)s - %(question_tag)s%(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Set level for third-party loggers to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def set_request_id(request_id: str) -> None:
    """
    Set the request ID in the current context.

    Args:
        request_id: The request ID to set
    """
    request_id_var.set(request_id)


class RequestLogFormatter(logging.Formatter):
    """Renders request log lines; divider records are written bare."""

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "divider", False):
            return DIVIDER
        return super().format(record)


class RequestLog:
    """
    Operational log of ask requests.

    Lines are written as ``<timestamp>\\t--> <message>`` to a single stream,
    separate from the structured application log. Write errors are handled
    by the logging handler and never reach the caller.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize the request log.

        Args:
            stream: Where lines are written (default: stdout)
        """
        self.logger = logging.getLogger(REQUEST_LOG_NAME)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(RequestLogFormatter(
            fmt='%(asctime)s.%(msecs)03d\t--> %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        self.logger.addHandler(handler)

    def divider(self) -> None:
        """Write a separator line ahead of a batch request."""
        self.logger.info(DIVIDER, extra={"divider": True})

    def received(self, message: str) -> None:
        self.logger.info(message)

    def completed(self, elapsed_ms: int) -> None:
        self.logger.info(f"Request completed in {elapsed_ms} milliseconds")
