"""
Custom log formatters for the blog API.

Currently supports JSON formatting for structured logging.
"""

import json
import logging
from datetime import datetime, timezone

# Attributes every LogRecord carries; anything else came in through extra=...
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    Each line carries timestamp, level, logger and message. Values passed
    through ``extra=...`` are added as top-level keys and formatted
    exceptions go under ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the specified record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string containing the formatted log record
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                log_data[key] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)
