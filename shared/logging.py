"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this module only decides
where records go and how they look. ``console`` renders with rich for local
work, ``json`` emits one JSON object per line for log shippers.
"""

import json
import logging
from datetime import datetime, timezone

from rich.logging import RichHandler

# Attributes every LogRecord has; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format records as single-line JSON, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "info", fmt: str = "console") -> None:
    """
    Configure the root logger.

    Args:
        level: Level name (debug, info, warning, error, critical).
            Unknown names fall back to INFO.
        fmt: "console" or "json".
    """
    resolved = logging.getLevelName(level.upper())
    invalid_level = not isinstance(resolved, int)
    if invalid_level:
        resolved = logging.INFO

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(resolved)

    if invalid_level:
        logging.getLogger(__name__).warning(
            f"Invalid log level '{level}', defaulting to 'info'"
        )
