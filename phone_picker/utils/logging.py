"""
Root logger setup for the phone-picker command line.

Only ``cli.py`` calls ``configure_logging()``, once per command, after the
config has loaded.  Engine and loader modules just ask for
``logging.getLogger(__name__)`` and never touch handlers, so importing the
library leaves the host application's logging alone.

Handlers
--------
- stderr, always.  Report text goes to stdout and stays pipeable.
- A UTF-8 file at ``[logging] log_file`` when that is non-empty; missing
  parent directories are created.

With ``[logging] json_format = true`` both handlers write JSON lines::

    {"ts": "2026-10-19T15:00:00Z", "level": "INFO", "logger": "...", "msg": "..."}

Keys passed through ``extra=`` land at the top level of that object.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phone_picker.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came from extra=.
_STANDARD_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, msg, exc, extras."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": created.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(config: "LoggingConfig") -> None:
    """Replace the root logger's handlers according to ``config``.

    Safe to call more than once; each call discards the previous handlers.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = _build_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
