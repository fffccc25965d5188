"""
Logging for the relay.

Relay records (logger "nepali_relay" and its children) are written to
LOG_DIR/relay.log, rotated at midnight with a week of history. Everything,
uvicorn included, also reaches one console handler on the root logger.
Records logged with ``extra={"upstream": name}`` carry an ``[name]`` tag so
traffic to one Google service can be grepped out of the file.
"""

import datetime
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .settings import settings


APP_LOGGER_NAME = "nepali_relay"
LOG_FILE_NAME = "relay.log"
LOG_BACKUP_DAYS = 7
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s%(upstream_tag)s: %(message)s"

_configured = False


def _zone_for(name: str | None) -> datetime.tzinfo:
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    # Host zone when LOG_TIMEZONE is unset or unknown.
    return datetime.datetime.now().astimezone().tzinfo or datetime.timezone.utc


class RelayFormatter(logging.Formatter):
    """
    Renders ISO-8601 timestamps in LOG_TIMEZONE and the upstream tag.
    """

    def __init__(self, timezone_name: str | None = None) -> None:
        super().__init__(LOG_FORMAT)
        self.zone = _zone_for(timezone_name)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.datetime.fromtimestamp(record.created, tz=self.zone)
        if datefmt:
            return stamp.strftime(datefmt)
        return stamp.isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        upstream = getattr(record, "upstream", None)
        record.upstream_tag = f" [{upstream}]" if upstream else ""
        return super().format(record)


def level_from_name(name: object) -> int:
    """Map a LOG_LEVEL string to a logging level, INFO when unknown."""
    if not isinstance(name, str):
        return logging.INFO
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the relay logger, or its child for one component."""
    if not component:
        return logging.getLogger(APP_LOGGER_NAME)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{component}")


def build_file_handler(
    log_dir: Path, formatter: logging.Formatter
) -> TimedRotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        when="midnight",
        backupCount=LOG_BACKUP_DAYS,
        encoding="utf-8",
        delay=True,
    )
    handler.setFormatter(formatter)
    # uvicorn and library records stay on the console only.
    handler.addFilter(logging.Filter(APP_LOGGER_NAME))
    return handler


def setup_logging() -> None:
    """Configure relay logging once per process."""
    global _configured
    if _configured:
        return

    level = level_from_name(settings.log_level)
    formatter = RelayFormatter(settings.log_timezone)

    relay_logger = get_logger()
    relay_logger.setLevel(level)
    relay_logger.addHandler(build_file_handler(Path(settings.log_dir), formatter))

    root = logging.getLogger()
    root.setLevel(level)
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    _configured = True


logger = get_logger()
