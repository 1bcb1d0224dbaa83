"""Logging setup for livecon.

Usage:
    from livecon.core.logging_config import configure_logging

    # Once, at application startup
    configure_logging(level="DEBUG")

    # In modules
    logger = logging.getLogger(__name__)

Environment Variables:
    LIVECON_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LIVECON_LOG_FORMAT: Output format ("text" or "json")
    LIVECON_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from livecon.core.transcript import Transcript

TEXT_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in via extra=
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    {"timestamp": "...", "level": "DEBUG", "logger": "livecon.core.session",
     "message": "submit: chars=5", "extra": {...}}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class TranscriptLogHandler(logging.Handler):
    """Echoes log records into a console transcript.

    Lets messages from the host application show up next to the user's
    commands. Records are rendered as "[LEVEL] message".
    """

    def __init__(self, transcript: Transcript, level: int | str = logging.WARNING) -> None:
        super().__init__(level)
        self.transcript = transcript
        self.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.transcript.append(self.format(record))
        except Exception:
            self.handleError(record)


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    force: bool = False,
) -> None:
    """Configure the root logger.

    Call once at startup; later calls are ignored unless force=True.

    Args:
        level: Log level. Defaults to LIVECON_LOG_LEVEL or "WARNING".
        format: Output format. Defaults to LIVECON_LOG_FORMAT or "text".
        file_path: Optional log file. Defaults to LIVECON_LOG_FILE.
        force: Reconfigure even if already configured.
    """
    global _configured
    if _configured and not force:
        return

    level = level or os.environ.get("LIVECON_LOG_LEVEL", "WARNING")
    format = format or os.environ.get("LIVECON_LOG_FORMAT", "text")  # type: ignore
    file_path = file_path or os.environ.get("LIVECON_LOG_FILE")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    if format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True
