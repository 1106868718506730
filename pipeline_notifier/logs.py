"""JSON log formatting for the standard ``logging`` module.

CloudWatch Logs metric filters read one JSON object per line, so every
record is rendered as a single JSON document.  Anything passed through
``extra=`` is merged into the top level of that document.
"""

from __future__ import annotations

import json
import logging
from typing import Any

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RESERVED = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as one compact JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                data[key] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str, separators=(",", ":"))


def configure_logging(level: str | int = "INFO") -> None:
    """Install the JSON formatter on the root logger.

    The Lambda runtime pre-installs a root handler; that handler is reused
    rather than replaced.  Safe to call more than once.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    for handler in root.handlers:
        handler.setFormatter(JsonFormatter())
    # botocore is chatty at INFO
    logging.getLogger("botocore").setLevel(logging.WARNING)
