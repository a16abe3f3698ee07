"""Structured logging for tradestats.

Events are dotted names with key/value context, e.g.
``logger.info("loaders.trades_loaded", path="trades.csv", count=120)``.

Console output goes to stderr so the report on stdout stays clean. File
output is optional and always JSON lines.

Levels used:
    INFO     trade files loaded, report completed
    DEBUG    resolved report settings
    ERROR    rows that fail validation
"""

import inspect
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Literal

import structlog
from pydantic import BaseModel

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_FILE = Path("logs/tradestats.log")

# strftime patterns; "{ms}" is replaced by hundredths of a second
_TIMESTAMP_PATTERNS = {
    "compact": "%y%m%d-%H%M%S.{ms}",  # 251022-205007.28
    "time": "%H:%M:%S.{ms}",  # 20:50:07.28
    "short": "%m%dT%H%M%S",  # 1022T205007
}

_LEVEL_COLORS = {
    "debug": "\033[36m",
    "info": "\033[32m",
    "warning": "\033[33m",
    "error": "\033[31m",
    "critical": "\033[35m",
}
_RESET = "\033[0m"
_DIM = "\033[90m"


class LoggingConfig(BaseModel):
    """Settings accepted by LoggerFactory.configure()."""

    level: LogLevel = "INFO"  # console threshold
    format: Literal["console", "json"] = "console"
    timestamp_format: Literal["iso", "compact", "time", "short"] = "compact"
    enable_file: bool = False
    file_path: Path | None = None  # DEFAULT_LOG_FILE when None
    file_level: LogLevel = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3


def _timestamper(fmt: str) -> Callable[[Any, str, dict[str, Any]], dict[str, Any]]:
    """Processor stamping UTC time under 'log_timestamp' (trade context keeps 'timestamp')."""
    pattern = _TIMESTAMP_PATTERNS.get(fmt)

    def stamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        if pattern is None:
            event_dict["log_timestamp"] = now.isoformat()
        else:
            event_dict["log_timestamp"] = now.strftime(pattern.format(ms=f"{now.microsecond // 10000:02d}"))
        return event_dict

    return stamp


def _render_console(logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
    """Render `<time> [level] event | k=v ... (module:line)` with ANSI colors."""
    level = str(event_dict.pop("level", method_name)).lower()
    head = [
        str(event_dict.pop("log_timestamp", "")),
        f"[{_LEVEL_COLORS.get(level, '')}{level}{_RESET}]",
        str(event_dict.pop("event", "")),
    ]

    filename = event_dict.pop("filename", None)
    lineno = event_dict.pop("lineno", None)
    event_dict.pop("logger", None)

    context = " ".join(f"{k}={v}" for k, v in sorted(event_dict.items()) if not k.startswith("_"))
    if context:
        head.append(f"{_DIM}|{_RESET} {context}")
    if filename and lineno:
        head.append(f"{_DIM}({Path(filename).stem}:{lineno}){_RESET}")

    return " ".join(part for part in head if part)


class LoggerFactory:
    """
    Process-wide structlog setup.

    Call configure() once at startup; get_logger() configures with defaults
    if nothing has been configured yet.

    Example:
        LoggerFactory.configure(LoggingConfig(level="DEBUG"))
        logger = LoggerFactory.get_logger()
        logger.debug("report.config_resolved", timeframe="week")
    """

    _configured: bool = False

    @classmethod
    def configure(cls, config: LoggingConfig | None = None) -> None:
        """Install stdlib handlers and structlog processors for config."""
        config = config or LoggingConfig()
        pre_chain = cls._pre_chain(config.timestamp_format)

        console_renderer: Any = _render_console if config.format == "console" else structlog.processors.JSONRenderer()
        handlers = [cls._handler(logging.StreamHandler(sys.stderr), config.level, console_renderer, pre_chain)]
        root_level = getattr(logging, config.level)

        if config.enable_file:
            handlers.append(cls._file_handler(config, pre_chain))
            root_level = min(root_level, getattr(logging, config.file_level))

        logging.basicConfig(level=root_level, handlers=handlers, force=True)

        if config.format == "console":
            exc_processors: list[Any] = [
                structlog.dev.set_exc_info,
                structlog.processors.ExceptionRenderer(structlog.dev.plain_traceback),  # type: ignore[arg-type]
            ]
        else:
            exc_processors = [structlog.processors.format_exc_info]

        structlog.configure(
            processors=[*pre_chain, *exc_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        cls._configured = True

    @staticmethod
    def _pre_chain(timestamp_format: str) -> list[Any]:
        """Processors run for both structlog and foreign stdlib records."""
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _timestamper(timestamp_format),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.CallsiteParameterAdder(
                [structlog.processors.CallsiteParameter.FILENAME, structlog.processors.CallsiteParameter.LINENO]
            ),
        ]

    @staticmethod
    def _handler(handler: logging.Handler, level: str, renderer: Any, pre_chain: list[Any]) -> logging.Handler:
        handler.setLevel(getattr(logging, level))
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))
        return handler

    @classmethod
    def _file_handler(cls, config: LoggingConfig, pre_chain: list[Any]) -> logging.Handler:
        """JSON-lines file handler, rotating by size unless disabled."""
        path = config.file_path or DEFAULT_LOG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler
        if config.file_rotation:
            handler = RotatingFileHandler(
                path,
                maxBytes=config.max_file_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        else:
            handler = logging.FileHandler(path, encoding="utf-8")

        return cls._handler(handler, config.file_level, structlog.processors.JSONRenderer(), pre_chain)

    @classmethod
    def get_logger(cls, name: str | None = None):
        """
        Get a structlog logger, configuring defaults on first call.

        Args:
            name: Logger name. Defaults to the caller's module name.
        """
        if not cls._configured:
            cls.configure()

        if name is None:
            caller = inspect.currentframe()
            caller = caller.f_back if caller else None
            name = caller.f_globals.get("__name__", "tradestats") if caller else "tradestats"

        return structlog.get_logger(name)

    @classmethod
    def reset(cls) -> None:
        """Remove installed handlers and structlog configuration (used by tests)."""
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
        structlog.reset_defaults()
        cls._configured = False
