# ABOUTME: Logging configuration using loguru sinks fed by structlog through the stdlib bridge
# ABOUTME: Dual-mode operation: interactive CLI (log files) vs production JSON logging on stdout

import contextlib
import io
import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

SUPPRESSED_LIBRARIES = [
    "crawl4ai",
    "playwright",
    "asyncio",
    "fitz",
    "urllib3",
    "py.warnings",
]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (and structlog through them) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).bind(logger_name=record.name).log(level, record.getMessage())


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("LANGRANK_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Configure third-party library logging to avoid CLI interference."""
    critical_loggers = ["crawl4ai", "crawl4ai.async_webcrawler", "playwright", "fitz"]
    warning_loggers = ["asyncio", "urllib3", "websockets", "aiohttp"]

    for logger_name in critical_loggers:
        logging.getLogger(logger_name).setLevel(logging.CRITICAL)

    for logger_name in warning_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def setup_structlog() -> None:
    """Route structlog events through stdlib logging so loguru sinks receive them."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()
    setup_structlog()

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    root.handlers = [InterceptHandler()]
    root.setLevel(numeric_level)

    # Remove default loguru handler
    logger.remove()
    logger.configure(extra={"logger_name": "langrank"})

    if mode == LoggingMode.INTERACTIVE:
        # Interactive mode: logs to files, no console interference
        log_dir = Path("logs")
        try:
            log_dir.mkdir(exist_ok=True)
        except OSError:
            mode = LoggingMode.PRODUCTION

    if mode == LoggingMode.PRODUCTION:
        logger.add(sys.stdout, level=log_level, format="{time} | {level} | {message}", serialize=True)
        return

    log_file_path = log_file or str(log_dir / "langrank.log")

    # Human-readable logs
    logger.add(
        log_file_path,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[logger_name]} - {message}",
        rotation="10 MB",
        retention="7 days",
    )

    # JSON logs for machine processing
    logger.add(
        log_dir / "langrank.json",
        level=log_level,
        format="{time} | {level} | {message}",
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )

    # Errors only
    logger.add(
        log_dir / "errors.log",
        level="ERROR",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[logger_name]} - {message}",
        backtrace=True,
        diagnose=True,
    )


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    log_dir = Path("logs")
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(log_dir.absolute()) if log_dir.exists() else None,
        "log_files": {
            "main": str(log_dir / "langrank.log") if interactive else None,
            "json": str(log_dir / "langrank.json") if interactive else None,
            "errors": str(log_dir / "errors.log") if interactive else None,
        },
        "third_party_suppressed": list(SUPPRESSED_LIBRARIES),
    }


@contextlib.contextmanager
def suppress_library_output():
    """Context manager to completely suppress stdout/stderr from noisy libraries."""
    original_stdout, original_stderr = sys.stdout, sys.stderr

    try:
        sys.stdout = sys.stderr = io.StringIO()
        yield
    finally:
        sys.stdout, sys.stderr = original_stdout, original_stderr
