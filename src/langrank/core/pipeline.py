# ABOUTME: End-to-end ranking pipeline: scrape all sources, merge per axis, assemble the report
# ABOUTME: Failed sources count as empty rankings so the report is always complete

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from langrank.config import Config, get_config
from langrank.core.merge import merge
from langrank.core.models import AXIS_PAIRINGS, CombinedRow, ComparisonAxis, SourceFailure, SourceSuccess
from langrank.core.orchestrator import AggregationOrchestrator, ProgressCallback
from langrank.extraction.base import RankedEntry
from langrank.extraction.session import BrowserEngine
from langrank.extraction.sources import SOURCES, SourceDescriptor
from langrank.report.model import HeaderOptions, ReportModel, assemble, build_header
from langrank.utils.logging import get_logger


@dataclass(frozen=True)
class PipelineOutcome:
    report: ReportModel
    results: list[SourceSuccess | SourceFailure]

    @property
    def failed_sources(self) -> list[str]:
        return [result.source_id for result in self.results if not result.ok]


def entries_by_source(results: Sequence[SourceSuccess | SourceFailure]) -> dict[str, tuple[RankedEntry, ...]]:
    """Map each source to its entries; failed sources map to an empty tuple."""
    return {result.source_id: result.entries for result in results}


def build_tables(results: Sequence[SourceSuccess | SourceFailure]) -> dict[ComparisonAxis, list[CombinedRow]]:
    """Merge the paired sources of every comparison axis."""
    entries: Mapping[str, tuple[RankedEntry, ...]] = entries_by_source(results)
    return {
        pairing.axis: merge(entries.get(pairing.left_source, ()), entries.get(pairing.right_source, ()))
        for pairing in AXIS_PAIRINGS
    }


class RankingPipeline:
    """Coordinates orchestrator, merger and assembler for one run.

    When no engine is passed, one is created from the config and started and
    stopped around the run.
    """

    def __init__(
        self,
        engine: BrowserEngine | None = None,
        config: Config | None = None,
        progress: ProgressCallback | None = None,
        sources: Sequence[SourceDescriptor] = SOURCES,
        header: HeaderOptions | None = None,
    ):
        self.config = config or get_config()
        self.engine = engine
        self.progress = progress
        self.sources = sources
        self.header = header
        self.logger = get_logger(__name__)

    def _header(self) -> HeaderOptions:
        if self.header is not None:
            return self.header
        return build_header(title=self.config.report_title, subtitle=self.config.report_subtitle)

    async def run(self) -> PipelineOutcome:
        if self.engine is not None:
            return await self._run_with(self.engine)

        async with BrowserEngine(
            headless=self.config.headless, navigation_attempts=self.config.navigation_attempts
        ) as engine:
            return await self._run_with(engine)

    async def _run_with(self, engine: BrowserEngine) -> PipelineOutcome:
        orchestrator = AggregationOrchestrator(
            engine,
            timeout_seconds=self.config.source_timeout_seconds,
            progress=self.progress,
            heartbeat_seconds=self.config.heartbeat_seconds,
        )
        results = await orchestrator.run(self.sources)

        tables = build_tables(results)
        for axis, rows in tables.items():
            self.logger.info("Merged comparison table", axis=axis.value, rows=len(rows))

        report = assemble(
            self._header(),
            popularity=tables[ComparisonAxis.POPULARITY],
            compensation=tables[ComparisonAxis.COMPENSATION],
            learning_difficulty=tables[ComparisonAxis.LEARNING_DIFFICULTY],
        )
        outcome = PipelineOutcome(report=report, results=results)
        if outcome.failed_sources:
            self.logger.warning("Report built with missing sources", failed_sources=outcome.failed_sources)
        return outcome
