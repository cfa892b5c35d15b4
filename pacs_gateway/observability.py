"""
Logging setup for the gateway.

Modules log through ``logging.getLogger(__name__)``; this module only
decides how the root logger renders records.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .config import settings


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key in ("message_type", "message_id", "endpoint"):
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        return json.dumps(payload, separators=(",", ":"))


def configure_logging(fmt: Optional[str] = None, level: Optional[str] = None) -> None:
    """Configure the root logger with plain text or JSON output."""
    fmt = (fmt or settings.log_format).lower()
    level = (level or settings.log_level).upper()

    root = logging.getLogger()
    root.setLevel(level)

    # Replace any handlers installed by the ASGI server
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
        )
    root.addHandler(handler)
