# ABOUTME: Progress tracking using Rich's spinner, driven by orchestrator progress events
# ABOUTME: Keeps the CLI informed while sources are scraped without touching extraction code

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

if TYPE_CHECKING:
    from langrank.core.models import ProgressEvent

_EVENT_ICONS = {
    "started": "🕷️",
    "succeeded": "✅",
    "failed": "❌",
    "heartbeat": "⏳",
}


class SimpleProgressTracker:
    """Progress callback that mirrors orchestrator events onto a Rich spinner task."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id
        self.events: list[ProgressEvent] = []

    def __call__(self, event: ProgressEvent) -> None:
        self.events.append(event)
        icon = _EVENT_ICONS.get(event.kind, "🔄")
        self.progress.update(
            self.task_id,
            description=f"{icon} {event.message} ({event.completed}/{event.total} sources done)",
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass


def create_smart_progress(
    console, initial_description: str = "🌐 Collecting language rankings..."
) -> tuple[Progress, Any, SimpleProgressTracker]:
    """Create a simple progress display with spinner.

    Args:
        console: Rich console instance
        initial_description: Initial progress description

    Returns:
        Tuple of (progress, task_id, tracker)
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(initial_description, total=None)
    tracker = SimpleProgressTracker(progress, task_id)

    return progress, task_id, tracker
