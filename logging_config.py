from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple

from opentelemetry import trace

from settings import get_settings
from tracing import trace_id_of

CONTEXT_KEYS = (
    "cep",
    "city",
    "status",
    "upstream",
    "elapsed_ms",
    "reason",
    "trace_id",
)

LOG_FORMAT = "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_configured = False


class ContextualFormatter(logging.Formatter):
    """Appends ``key=value`` pairs for known ``extra`` fields to each line.

    ``trace_id`` is taken from the span active while the record is formatted
    unless the caller supplied one, so every log line emitted inside a request
    can be matched with its trace.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        style: str = "%",
        context_keys: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._context_keys: Sequence[str] = tuple(context_keys or CONTEXT_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = " ".join(f"{key}={value}" for key, value in self._context(record))
        return f"{message} | {pairs}" if pairs else message

    def _context(self, record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
        for key in self._context_keys:
            value = getattr(record, key, None)
            if value is None and key == "trace_id":
                value = trace_id_of(trace.get_current_span())
            if value is not None:
                yield key, value


def _dict_config(level: str | int) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": ContextualFormatter,
                "fmt": LOG_FORMAT,
                "datefmt": DATE_FORMAT,
                "context_keys": list(CONTEXT_KEYS),
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "contextual",
            }
        },
        "root": {"handlers": ["console"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Install the console handler once per process; later calls are no-ops."""
    global _configured
    if _configured:
        return
    dictConfig(_dict_config(level if level is not None else get_settings().log_level))
    _configured = True
