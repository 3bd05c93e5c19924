"""Structured event logging for ecadmin."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .errors import ConfigError

LOGGER_NAME = "ecadmin"
_LOGGER = logging.getLogger(LOGGER_NAME)

_PREFERRED_KEY_ORDER = (
    "ts_utc",
    "level",
    "logger",
    "ts",
    "command",
    "operation",
    "path",
    "policy",
    "status",
    "error_type",
    "error",
)


class StructuredTextFormatter(logging.Formatter):
    """Format log records as human-readable structured blocks."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        # Blank line between entries, none before the first one.
        self._first_entry = True

    @staticmethod
    def _format_value(value: Any) -> str:
        return str(value).replace("\n", "\\n")

    @staticmethod
    def _ordered_keys(data: dict[str, Any]) -> list[str]:
        preferred = [k for k in _PREFERRED_KEY_ORDER if k in data and data[k] is not None]
        remaining = sorted(
            k for k in data if k not in _PREFERRED_KEY_ORDER and data[k] is not None
        )
        return preferred + remaining

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "ts_utc": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        message = record.getMessage()
        parsed = None
        if message.startswith("{") and message.endswith("}"):
            try:
                parsed = json.loads(message)
            except json.JSONDecodeError:
                parsed = None

        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["event"] = record.name
            base["message"] = message

        event_name = str(base.pop("event", record.name))
        lines = [f"=== {event_name} ==="]
        for key in self._ordered_keys(base):
            lines.append(f"{key}: {self._format_value(base[key])}")

        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        body = "\n".join(lines)
        if self._first_entry:
            self._first_entry = False
            return body
        return "\n" + body


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event on the ecadmin logger."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        payload[key] = _to_log_safe(value)
    _LOGGER.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def setup_logging(log_file: Path | None = None) -> None:
    """Route ecadmin events to ``log_file``, or silence them when it is None.

    Raises ConfigError if the log file cannot be opened.
    """
    for handler in list(_LOGGER.handlers):
        _LOGGER.removeHandler(handler)
        handler.close()

    _LOGGER.propagate = False
    if log_file is None:
        _LOGGER.addHandler(logging.NullHandler())
        return

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not open log file: {log_file}") from exc
    handler.setFormatter(StructuredTextFormatter())
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(logging.INFO)
