"""
logfmt output for the client and the clone CLI.

Structured records from ``log_event`` carry an ``event`` extra and render as
``event=cma_call``; plain messages such as "Creating Entry e1" render as
``msg=...``. Every record stays on one line.
"""

import logging
from typing import Any, Optional, TextIO

LOG_EXTRA_FIELDS = (
    "request_id",
    "method",
    "endpoint",
    "status",
    "duration_ms",
    "tool",
    "attempt",
    "error_type",
    "space_id",
    "count",
    "skip",
    "total",
)

# httpx logs every request at INFO, which repeats each cma_call line.
NOISY_LOGGERS = ("httpx", "httpcore")


class LogfmtFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        event = getattr(record, "event", None)
        msg = record.getMessage()
        if event:
            kv.append(f"event={self._fmt_val(event)}")
            if msg and msg != event:
                kv.append(f"msg={self._fmt_val(msg)}")
        elif msg:
            kv.append(f"msg={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info and record.exc_info[0] is not None:
            kv.append(f"exc_type={record.exc_info[0].__name__}")
            kv.append(f"exc={self._fmt_val(record.exc_info[1])}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val).replace("\r", "").replace("\n", "\\n")
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Route all logging through one logfmt handler (stderr unless ``stream``)."""

    root = logging.getLogger()
    # Avoid duplicate handlers if called twice
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
