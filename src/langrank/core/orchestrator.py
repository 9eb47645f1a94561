# ABOUTME: Runs every source extraction concurrently and collects one outcome per source
# ABOUTME: A failing or hanging source becomes a SourceFailure; siblings are never cancelled

import asyncio
import contextlib
import time
from collections.abc import Callable, Sequence

from langrank.core.models import ProgressEvent, ProgressKind, SourceFailure, SourceSuccess
from langrank.extraction.base import NavigationFailure, RankingSourceError
from langrank.extraction.session import BrowserEngine
from langrank.extraction.sources import EntryExtractor, SourceDescriptor
from langrank.utils.logging import get_logger

ProgressCallback = Callable[[ProgressEvent], None]
ExtractorFactory = Callable[..., EntryExtractor]


class AggregationOrchestrator:
    """Concurrent, failure-isolating runner for a list of source descriptors.

    Each source gets its own session leased from the shared browser engine and
    its own timeout. Results come back in descriptor order whatever the order
    of completion.
    """

    def __init__(
        self,
        engine: BrowserEngine,
        timeout_seconds: float | None = 90.0,
        progress: ProgressCallback | None = None,
        heartbeat_seconds: float | None = 5.0,
        extractor_factory: ExtractorFactory = EntryExtractor,
    ):
        self.engine = engine
        self.timeout_seconds = timeout_seconds
        self.progress = progress
        self.heartbeat_seconds = heartbeat_seconds
        self.extractor_factory = extractor_factory
        self.logger = get_logger(__name__)
        self._completed = 0
        self._total = 0
        self._started_at = 0.0

    async def run(self, descriptors: Sequence[SourceDescriptor]) -> list[SourceSuccess | SourceFailure]:
        self._completed = 0
        self._total = len(descriptors)
        self._started_at = time.monotonic()

        self.logger.info("Starting source extraction", sources=[d.source_id for d in descriptors])

        heartbeat = asyncio.create_task(self._heartbeat()) if self.heartbeat_seconds else None
        try:
            results = await asyncio.gather(*(self._run_source(descriptor) for descriptor in descriptors))
        finally:
            if heartbeat is not None:
                heartbeat.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await heartbeat

        failed = [result.source_id for result in results if not result.ok]
        self.logger.info(
            "Source extraction finished",
            succeeded=len(results) - len(failed),
            failed_sources=failed,
            duration_seconds=round(self._elapsed(), 3),
        )
        return list(results)

    async def _run_source(self, descriptor: SourceDescriptor) -> SourceSuccess | SourceFailure:
        source_id = descriptor.source_id
        extractor = self.extractor_factory(descriptor, timeout=self.timeout_seconds)
        started = time.monotonic()
        self._emit("started", source_id, f"Scraping {descriptor.display_name}")

        try:
            async with self.engine.session(source_id) as session:
                async with asyncio.timeout(self.timeout_seconds):
                    entries = await extractor.extract(session)
        except TimeoutError:
            error: Exception = NavigationFailure(source_id, f"Timed out after {self.timeout_seconds}s")
        except RankingSourceError as e:
            error = e
        except Exception as e:
            self.logger.exception("Unexpected error while scraping source", source_id=source_id)
            error = e
        else:
            duration = time.monotonic() - started
            self._completed += 1
            self._emit("succeeded", source_id, f"{descriptor.display_name}: {len(entries)} entries")
            return SourceSuccess(source_id=source_id, entries=tuple(entries), duration_seconds=round(duration, 3))

        duration = time.monotonic() - started
        self._completed += 1
        self.logger.warning(
            "Source failed, continuing without it",
            source_id=source_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._emit("failed", source_id, f"{descriptor.display_name} failed")
        return SourceFailure(
            source_id=source_id,
            cause=str(error) or type(error).__name__,
            error_type=type(error).__name__,
            duration_seconds=round(duration, 3),
        )

    async def _heartbeat(self) -> None:
        while True:
            await asyncio.sleep(self.heartbeat_seconds)
            self.logger.info("Scraping in progress", completed=self._completed, total=self._total)
            self._emit("heartbeat", None, "Scraping in progress")

    def _emit(self, kind: ProgressKind, source_id: str | None, message: str) -> None:
        if self.progress is None:
            return
        event = ProgressEvent(
            kind=kind,
            completed=self._completed,
            total=self._total,
            elapsed_seconds=round(self._elapsed(), 3),
            source_id=source_id,
            message=message,
        )
        try:
            self.progress(event)
        except Exception as e:
            self.logger.warning("Progress callback failed", error=str(e), error_type=type(e).__name__)

    def _elapsed(self) -> float:
        return time.monotonic() - self._started_at
