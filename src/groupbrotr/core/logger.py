"""
Structured logging with key=value and JSON output support.

[Logger][groupbrotr.core.logger.Logger] wraps a stdlib ``logging.Logger`` and
turns keyword arguments into structured fields: ``key=value`` pairs for
terminals, or one JSON object per line when the CLI output is piped into a
log collector.

Field names that denote secret key material (``secret``, ``nsec``,
``private_key``, ...) are replaced with ``<redacted>`` in both modes, so a
careless ``logger.debug("signed", secret=...)`` never leaks a key. Long values
are cut to a configurable length; values with spaces, ``=`` or quotes are
escaped and quoted.

[StructuredFormatter][groupbrotr.core.logger.StructuredFormatter] reads the
``structured_kv`` extra attached by Logger. Installed on the root handler by
the CLI, it gives the plain ``logging.getLogger("groupbrotr.<layer>")``
records emitted by the utils and nips layers the same
``level name message`` shape.

Examples:
    ```python
    from groupbrotr.core.logger import Logger

    logger = Logger("cli")
    logger.info("event_published", kind=9, group="pizza lovers")
    # Output: info cli event_published kind=9 group="pizza lovers"

    Logger("cli", json_output=True).info("event_published", kind=9)
    # Output: {"timestamp": "...", "level": "info", "service": "cli", ...}
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, ClassVar


REDACTED = "<redacted>"

_SECRET_FIELDS = frozenset({"secret", "secret_key", "private_key", "privkey", "nsec", "seckey"})
_NEEDS_QUOTES = (" ", "=", '"', "'")


def redact(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *kwargs* with secret key fields replaced by ``<redacted>``."""
    return {k: REDACTED if k.lower() in _SECRET_FIELDS else v for k, v in kwargs.items()}


def _truncate(text: str, max_length: int | None) -> str:
    if not max_length or len(text) <= max_length:
        return text
    return f"{text[:max_length]}...<truncated {len(text) - max_length} chars>"


def _render(text: str) -> str:
    if text and not any(c in text for c in _NEEDS_QUOTES):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Render *kwargs* as space-separated ``key=value`` pairs.

    Args:
        kwargs: Fields to render. Secret fields are redacted first.
        max_value_length: Per-value character limit; None disables it.
        prefix: Prepended to a non-empty result.

    Returns:
        e.g. ``' kind=9 content="hello group"'``, or ``""`` for no fields.
    """
    if not kwargs:
        return ""
    pairs = (
        f"{key}={_render(_truncate(str(value), max_value_length))}"
        for key, value in redact(kwargs).items()
    )
    return prefix + " ".join(pairs)


class StructuredFormatter(logging.Formatter):
    """Formats every record as ``level name message key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        fields: dict[str, Any] = getattr(record, "structured_kv", {})
        return line + format_kv_pairs(fields) if fields else line


class Logger:
    """Structured logger: ``logger.info("event", key=value, ...)``.

    Args:
        name: Name of the underlying ``logging.getLogger(name)``.
        json_output: Emit one JSON object per record instead of key=value
            extras.
        max_value_length: Per-value character limit; defaults to 1000.
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = (
            self._DEFAULT_MAX_VALUE_LENGTH if max_value_length is None else max_value_length
        )

    def _json_line(self, msg: str, level: str, kwargs: dict[str, Any]) -> str:
        payload = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "service": self._logger.name,
            "message": msg,
            **redact(kwargs),
        }
        return json.dumps(payload, default=str)

    def _make_extra(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Attach redacted fields as ``structured_kv``; long values pre-truncated."""
        if not kwargs:
            return {}
        fields = {
            key: _truncate(str(value), self._max_value_length)
            if self._max_value_length and len(str(value)) > self._max_value_length
            else value
            for key, value in redact(kwargs).items()
        }
        return {"structured_kv": fields}

    def _emit(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if self._json_output:
            level_name = logging.getLevelName(level).lower()
            self._logger.log(level, self._json_line(msg, level_name, kwargs), exc_info=exc_info)
        else:
            self._logger.log(level, msg, extra=self._make_extra(kwargs), exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._emit(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._emit(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._emit(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._emit(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        self._emit(logging.ERROR, msg, kwargs, exc_info=True)
