# scope_intake/logging_config.py
"""
Stderr-only JSON logging configuration.

The CLI writes documents to stdout when no output file is given,
so log lines must never share that stream.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_VERBOSITY_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def level_for_verbosity(verbosity: str) -> int:
    """Map an OutputConfig verbosity name to a logging level."""
    return _VERBOSITY_LEVELS.get(verbosity, logging.INFO)


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure logging to output JSON to stderr only.

    Clears existing handlers so repeated calls don't duplicate output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # HTTP client chatter from the question generator stays at WARNING
    for logger_name in ["httpx", "ollama"]:
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(max(level, logging.WARNING))
        logger.propagate = False
