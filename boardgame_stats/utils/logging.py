"""
Logging setup for the boardgame-stats CLI.

Reports are printed to stdout, so every log line goes to stderr (and,
optionally, to a log file).  Call ``configure_logging(config, debug=...)``
once per CLI invocation; library modules only ever use
``logging.getLogger(__name__)``.

Output shapes:

  console (plain)   ``[WARNING] boardgame_stats.ingestion.data_loader: 2 plays ...``
  log file (plain)  ``2024-03-01T15:00:00Z [WARNING] boardgame_stats...: 2 plays ...``
  JSON lines        ``{"ts": "...", "level": "INFO", "logger": "...", "msg": "...", ...}``

``debug=True`` (``AppConfig.debug`` / ``BOARDGAME_STATS_DEBUG``) forces DEBUG
level whatever ``[logging] level`` says, and adds the source location to
JSON records.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boardgame_stats.config import LoggingConfig

CONSOLE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``.

    Fields passed through ``extra=`` are copied to the top level.  With
    ``include_location`` the record's ``module:line`` is added as ``where``.
    """

    def __init__(self, include_location: bool = False) -> None:
        super().__init__()
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if self.include_location:
            payload["where"] = f"{record.module}:{record.lineno}"
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, val)
            for key, val in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def resolve_level(config: "LoggingConfig", debug: bool = False) -> int:
    """Numeric level for ``config``; ``debug`` overrides it with DEBUG."""
    if debug:
        return logging.DEBUG
    return logging.getLevelName(config.level)


def configure_logging(config: "LoggingConfig", debug: bool = False) -> int:
    """Install stderr (and optional file) handlers on the root logger.

    Returns:
        The level that was applied.
    """
    level = resolve_level(config, debug)

    def _handler(handler: logging.Handler, plain_format: str) -> logging.Handler:
        if config.json_format:
            handler.setFormatter(JsonFormatter(include_location=debug))
        else:
            handler.setFormatter(logging.Formatter(plain_format, datefmt=LOG_DATE_FORMAT))
        handler.setLevel(level)
        return handler

    handlers = [_handler(logging.StreamHandler(sys.stderr), CONSOLE_FORMAT)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(log_path, encoding="utf-8"), FILE_FORMAT))

    logging.basicConfig(level=level, handlers=handlers, force=True)
    return level
