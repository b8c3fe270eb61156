"""
Logging for the notes backend and its frontends.

The API server, the CLI and the TUI all log through structlog bound to the
stdlib root logger, set up once per process by setup_logging(). Defaults
come from config/settings/logging.yaml; keyword arguments win over the file.

A JSON record carries the event text plus: timestamp, level, logger,
func_name, lineno, and whatever was bound for the call. Inside an HTTP
request the middleware binds request_id, frontend, method and path; the
CLI and TUI tag their records with log_with_source().

Usage:
    from thinkspace.backend.core.logging import get_logger, setup_logging

    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": note.id})
    log_with_source(logger, "tui", "warning", "Failed to fetch notes", error=e.message)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from thinkspace.backend.core.config import find_project_root, load_yaml_config

# Values of the `source` field. Matches the X-Frontend-ID header values
# accepted by the request middleware, plus the server's own sources.
VALID_SOURCES = frozenset({"web", "cli", "tui", "api", "internal", "unknown"})

# Third-party loggers that flood INFO with per-request or per-query lines.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """Read logging.yaml once per process. A missing file is an error."""
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    """Processors applied to structlog and plain stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _file_handler(file_config: dict[str, Any], formatter: logging.Formatter) -> logging.Handler:
    """Rotating JSONL file under the project root; creates the directory."""
    path = _resolve_log_path(file_config["path"])
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=file_config["max_bytes"],
        backupCount=file_config["backup_count"],
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Route structlog and stdlib logging to stdout and, optionally, a JSONL file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        format_type: "json" or "console" for stdout. The file is always JSON.
        enable_console: Write to stdout.
        enable_file_logging: Write to the rotating file from logging.yaml.
    """
    config = _load_logging_config()
    handlers = config["handlers"]

    if level is None:
        level = config["level"]
    if format_type is None:
        format_type = config["format"]
    if enable_console is None:
        enable_console = handlers["console"]["enabled"]
    if enable_file_logging is None:
        enable_file_logging = handlers["file"]["enabled"]

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), processors)
    if format_type == "console":
        stdout_formatter = _formatter(structlog.dev.ConsoleRenderer(colors=True), processors)
    else:
        stdout_formatter = json_formatter

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if enable_console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(stdout_formatter)
        root.addHandler(stream)
    if enable_file_logging:
        root.addHandler(_file_handler(handlers["file"], json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """structlog logger for a module; pass __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit `source` field.

    For code outside a request, where the middleware has bound nothing.
    An unknown level name raises AttributeError.
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
