"""
Logging configuration for the intake server and tools.
Structured lines carrying a per-request id.
"""

import logging
import sys
import os
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Optional

request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

_logging_configured = False


class RequestIdFilter(logging.Filter):
    """Add the current request id to log records"""
    def filter(self, record):
        record.request_id = request_id.get() or '-'
        return True


class StructuredFormatter(logging.Formatter):
    def format(self, record):
        # [TIMESTAMP] [LEVEL] [REQUEST_ID] [LOGGER] MESSAGE
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        line = (f"[{timestamp}] [{record.levelname}] [{getattr(record, 'request_id', '-')}] "
                f"[{record.name}] {record.getMessage()}")
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure application-wide logging once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to an additional log file
    """
    global _logging_configured

    if _logging_configured:
        return

    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    formatter = StructuredFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestIdFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(RequestIdFilter())
        root_logger.addHandler(file_handler)

    _logging_configured = True


def set_request_id(rid: Optional[str] = None) -> str:
    """Set the request id for the current context, generating one if needed."""
    if rid is None:
        rid = uuid.uuid4().hex[:12]
    request_id.set(rid)
    return rid
