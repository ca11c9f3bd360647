"""Logging setup for kvconf tools with human-readable console output and optional JSONL files."""

from typing import Optional
import logging
import logging.handlers
import json
import sys
from pathlib import Path

# LogRecord attributes that are not user-supplied ``extra`` fields
_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON-lines formatter for machine-readable log files."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as one JSON object."""
        log_entry = {
            "timestamp": self.formatTime(record, self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Fields passed via ``extra=`` land directly on the record
        for key, value in record.__dict__.items():
            if key not in _RECORD_FIELDS and key not in log_entry:
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter for console and plain log files."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


class LoggerSetup:
    """Logging configuration for the ``kvconf`` logger hierarchy."""

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_level: str = "WARNING",
        enable_json: bool = False,
        enable_console: bool = True,
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
        app_name: str = "kvconf",
    ):
        """Initialize logger setup.

        Args:
            log_dir: Directory for log files; no files are written when None
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            enable_json: Also write a JSONL file (requires log_dir)
            enable_console: Log human-readable lines to stderr
            max_bytes: Max bytes per log file before rotation
            backup_count: Number of rotated files to keep
            app_name: Base name for log files
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = getattr(logging, log_level.upper(), logging.WARNING)
        self.enable_json = enable_json
        self.enable_console = enable_console
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.app_name = app_name

        self._configured_loggers: set[str] = set()

        self.json_formatter = JSONFormatter()
        self.human_formatter = HumanReadableFormatter()

    def _rotating_handler(self, suffix: str, formatter: logging.Formatter) -> logging.Handler:
        assert self.log_dir is not None
        self.log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.app_name}.{suffix}",
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        handler.setFormatter(formatter)
        handler.setLevel(self.log_level)
        return handler

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create a configured logger.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(name)

        if name in self._configured_loggers:
            return logger

        logger.setLevel(self.log_level)
        logger.propagate = False

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        if self.log_dir is not None:
            logger.addHandler(self._rotating_handler("log", self.human_formatter))
            if self.enable_json:
                logger.addHandler(self._rotating_handler("jsonl", self.json_formatter))

        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(self.human_formatter)
            console_handler.setLevel(self.log_level)
            logger.addHandler(console_handler)

        self._configured_loggers.add(name)
        return logger

    def shutdown(self) -> None:
        """Flush and close every handler this setup attached."""
        for logger_name in self._configured_loggers:
            logger = logging.getLogger(logger_name)
            for handler in logger.handlers[:]:
                handler.flush()
                handler.close()
                logger.removeHandler(handler)
            logger.propagate = True

        self._configured_loggers.clear()


_logger_setup: Optional[LoggerSetup] = None


def get_logger_setup() -> LoggerSetup:
    """Get the global logger setup instance, creating it if needed."""
    global _logger_setup
    if _logger_setup is None:
        _logger_setup = LoggerSetup()
    return _logger_setup


def setup_logging(
    log_dir: Optional[str] = None,
    log_level: str = "WARNING",
    enable_json: bool = False,
    enable_console: bool = True,
    app_name: str = "kvconf",
) -> LoggerSetup:
    """Configure the ``kvconf`` logger hierarchy globally.

    Replaces any previous global setup.
    """
    global _logger_setup
    if _logger_setup is not None:
        _logger_setup.shutdown()
    _logger_setup = LoggerSetup(
        log_dir=log_dir,
        log_level=log_level,
        enable_json=enable_json,
        enable_console=enable_console,
        app_name=app_name,
    )
    _logger_setup.get_logger("kvconf")
    return _logger_setup


def get_logger(name: str) -> logging.Logger:
    """Get a logger configured by the global setup."""
    return get_logger_setup().get_logger(name)


def shutdown_logging() -> None:
    """Shutdown the global logger setup and close all file handles."""
    global _logger_setup
    if _logger_setup is not None:
        _logger_setup.shutdown()
        _logger_setup = None
