# ABOUTME: Logger helpers: structlog logger lookup, extraction-step timing and pipeline run context
# ABOUTME: Every log line from a source carries its source_id so interleaved concurrent runs stay readable

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER_NAME = "langrank"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger; pass ``__name__`` to get per-module names in the log files."""
    return structlog.get_logger(name or ROOT_LOGGER_NAME)


def generate_operation_id() -> str:
    """Short random id that ties together all log lines of one report run."""
    return uuid.uuid4().hex[:8]


def log_extraction_step(step_name: str) -> Callable[[F], F]:
    """Decorator timing one async step of a source extraction.

    The source id is read from a ``source_id`` attribute on the first
    positional argument, which is the session or extractor instance for the
    methods this decorates. Failures are logged as warnings and re-raised:
    a failing source is an expected outcome that the orchestrator records.

    Args:
        step_name: Label used in the log events, e.g. ``"navigate"``

    Returns:
        Decorator for async callables
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            source_id = getattr(args[0], "source_id", None) if args else None
            step_logger = get_logger(func.__module__).bind(
                step=step_name, source_id=source_id, pipeline="ranking_extraction"
            )

            step_logger.debug(f"Starting extraction step: {step_name}")
            started = time.monotonic()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                step_logger.warning(
                    f"Failed extraction step: {step_name}",
                    duration_seconds=round(time.monotonic() - started, 3),
                    error=str(e),
                    error_type=type(e).__name__,
                    success=False,
                )
                raise

            extra = {"result_count": len(result)} if isinstance(result, list | tuple) else {}
            step_logger.info(
                f"Completed extraction step: {step_name}",
                duration_seconds=round(time.monotonic() - started, 3),
                success=True,
                **extra,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class LogContext:
    """Bind context onto a logger for the duration of a ``with`` block.

    On exit the block's outcome is logged: an error event if it raised,
    otherwise a completion event with the elapsed time.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context):
        self.logger = logger
        self.context = context
        self.bound_logger: structlog.stdlib.BoundLogger | None = None
        self._started = 0.0

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        self._started = time.monotonic()
        return self.bound_logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.bound_logger is None:
            return
        duration = round(time.monotonic() - self._started, 3)
        if exc_type is None:
            self.bound_logger.info("Pipeline finished", duration_seconds=duration)
        else:
            self.bound_logger.error(
                "Pipeline aborted", error=str(exc_val), error_type=exc_type.__name__, duration_seconds=duration
            )


def with_pipeline_context(pipeline_name: str, **context) -> LogContext:
    """Context for one CLI-level run, tagged with a fresh operation id."""
    return LogContext(
        get_logger(f"{ROOT_LOGGER_NAME}.pipeline"),
        pipeline=pipeline_name,
        operation_id=generate_operation_id(),
        **context,
    )
