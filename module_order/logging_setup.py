"""
JSONL logging bootstrap.
Initializes a single canonical JSONL sink early in CLI startup.
"""

import json
import logging
from datetime import UTC
from datetime import datetime
from pathlib import Path

# LogRecord attributes that are not copied into the JSON payload
_RECORD_FIELDS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    )
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "module-order.log", "ver": "1.0.0"},
                "logger": record.name,
                "message": record.getMessage(),
            }
            if isinstance(record.msg, dict):
                base.update(record.msg)
            # Attach any extra fields on the record
            for k, v in record.__dict__.items():
                if k in _RECORD_FIELDS:
                    continue
                base.setdefault(k, v)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None) -> None:
    """Configure the root logger level and (optionally) the JSONL sink.

    Args:
        path: JSONL file to append to; no file sink when None
        level: Level name (e.g. "DEBUG"); unknown names fall back to WARNING
    """
    root = logging.getLogger()
    level_value = getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    if not isinstance(level_value, int):
        level_value = logging.WARNING
    root.setLevel(level_value)
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    if path:
        root.addHandler(JsonlHandler(path))
