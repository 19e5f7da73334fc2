"""Logging setup for wizard sessions.

Records can carry session context (session id, active step) and can be
rendered as one JSON object per line for log shipping.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, MutableMapping, Optional, Tuple

__all__ = [
    "JSONFormatter",
    "WizardLogger",
    "get_wizard_logger",
    "setup_logging",
]

# Attributes every LogRecord has; anything else arrived through ``extra``
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_QUIET_LOGGERS = ("httpx", "httpcore")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Example output:
        {"timestamp": "2025-01-15T10:30:00.123Z", "level": "INFO",
         "logger": "rental_wizard.submission", "message": "Listing created",
         "extra": {"session_id": "3f2a9c01b7de", "step": "PRICE"}}
    """

    def __init__(self, exclude_fields: Optional[Iterable[str]] = None) -> None:
        super().__init__()
        self.exclude_fields = frozenset(exclude_fields or ())

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            },
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and key not in self.exclude_fields
        }
        if extra:
            entry["extra"] = extra
        return json.dumps(entry, default=str)


class WizardLogger(logging.LoggerAdapter):
    """Adapter that adds the session context to every record it emits.

    Example:
        logger = get_wizard_logger("rental_wizard.wizard")
        logger.set_context(session_id="3f2a9c01b7de", step="PRICE")
        logger.info("Submitting listing")
    """

    def __init__(self, name: str) -> None:
        super().__init__(logging.getLogger(name), {})

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self.extra)

    def set_context(self, **values: Any) -> None:
        self.extra.update(values)

    def clear_context(self) -> None:
        self.extra.clear()

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        merged = dict(self.extra)
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs

    def metric(self, name: str, value: Any, unit: Optional[str] = None, **tags: Any) -> None:
        """Emit a ``METRIC name=value`` line with the metric in the record extras."""
        extra: Dict[str, Any] = {"metric_name": name, "metric_value": value, **tags}
        if unit:
            extra["metric_unit"] = unit
        self.info("METRIC %s=%s", name, value, extra=extra)


def get_wizard_logger(name: str) -> WizardLogger:
    return WizardLogger(name)


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Route all wizard logging to stderr and, optionally, a file.

    Replaces any handlers already on the root logger.

    Args:
        verbose: Log at DEBUG instead of INFO
        json_format: Emit JSON lines instead of plain text
        log_file: Also append records to this path
    """
    level = logging.DEBUG if verbose else logging.INFO
    formatter: logging.Formatter = (
        JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT, "%H:%M:%S")
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
