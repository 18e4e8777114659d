from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Optional

# LogRecord attributes we forward into the JSON envelope when callers pass them via extra=
_EXTRA_KEYS = ("method", "path", "status", "attempt", "request_id")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.levelno <= logging.DEBUG:
            payload["file"] = f"{os.path.basename(record.pathname)}:{record.lineno}"
            payload["func"] = record.funcName
        return json.dumps(payload, ensure_ascii=False, default=str)


logger = logging.getLogger("shopify_client")
# No handlers until configure_logging() runs.
logger.propagate = False


def _dest_to_handler(destination: Optional[str]) -> logging.Handler:
    """
    Map destination hint to a logging.Handler.
    - None or "stderr" -> StreamHandler(sys.stderr)
    - "stdout" -> StreamHandler(sys.stdout)
    - anything else -> FileHandler(path)
    """
    if destination in (None, "stderr"):
        return logging.StreamHandler(stream=sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(stream=sys.stdout)
    return logging.FileHandler(destination, encoding="utf-8")


def configure_logging(
    *,
    level: str = "WARNING",
    fmt: str = "json",
    destination: Optional[str] = None,
) -> None:
    """
    Configure the library logger. Safe to call multiple times; it will replace handlers.
    """
    lvl = getattr(logging, str(level).upper(), logging.WARNING)
    logger.setLevel(lvl)

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    handler = _dest_to_handler(destination)
    if fmt == "text":
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    else:
        formatter = JsonFormatter()

    handler.setFormatter(formatter)
    logger.addHandler(handler)
