# ABOUTME: The six ranking sources as data, plus the single extractor that runs any of them
# ABOUTME: A markup change on one site means editing that site's descriptor and nothing else

from dataclasses import dataclass

from langrank.extraction.base import ExtractionFailure, RankedEntry
from langrank.extraction.parsers import (
    ParsingStrategy,
    PatternStrategy,
    TableStrategy,
    keep_top,
    reverse_and_renumber,
)
from langrank.extraction.session import BODY_SELECTOR, SourceSession
from langrank.utils.logging import get_logger, log_extraction_step

TOP_N = 10


@dataclass(frozen=True)
class SourceDescriptor:
    """Everything that distinguishes one ranking source from another."""

    source_id: str
    display_name: str
    url: str
    strategy: ParsingStrategy
    ready_selector: str = BODY_SELECTOR
    top_n: int | None = TOP_N
    reverse: bool = False


PYPL = SourceDescriptor(
    source_id="pypl",
    display_name="PYPL",
    url="https://pypl.github.io/PYPL.html",
    ready_selector="table",
    strategy=TableStrategy(row_selector="table tbody tr", rank_column=0, label_column=2, min_columns=3),
)

TIOBE = SourceDescriptor(
    source_id="tiobe",
    display_name="TIOBE",
    url="https://www.tiobe.com/tiobe-index/",
    ready_selector=".table-top20",
    strategy=TableStrategy(row_selector=".table-top20 tbody tr", rank_column=0, label_column=4, min_columns=6),
)

GEEKSFORGEEKS = SourceDescriptor(
    source_id="geeksforgeeks",
    display_name="GeeksforGeeks",
    url="https://www.geeksforgeeks.org/highest-paying-programming-languages-2024/",
    strategy=PatternStrategy(),
)

# This article counts down, so the best-paid language is listed last.
WITHCODEEXAMPLE = SourceDescriptor(
    source_id="withcodeexample",
    display_name="WithCodeExample",
    url="https://golang.withcodeexample.com/blog/top-highest-paying-programming-languages-to-learn-in-2024/",
    strategy=PatternStrategy(),
    reverse=True,
)

# The learning-difficulty lists are kept whole.
DIGITALOGY = SourceDescriptor(
    source_id="digitalogy",
    display_name="Digitalogy",
    url="https://www.digitalogy.co/blog/programming-languages-from-easy-to-hard/",
    strategy=PatternStrategy(),
    top_n=None,
)

LINKEDIN = SourceDescriptor(
    source_id="linkedin",
    display_name="LinkedIn",
    url="https://www.linkedin.com/pulse/navigating-learning-curve-definitive-ranking-languages-ibrahim-khalil/",
    strategy=PatternStrategy(),
    top_n=None,
)

SOURCES: tuple[SourceDescriptor, ...] = (PYPL, TIOBE, GEEKSFORGEEKS, WITHCODEEXAMPLE, DIGITALOGY, LINKEDIN)


class EntryExtractor:
    """Runs one source descriptor against a leased session."""

    def __init__(self, descriptor: SourceDescriptor, timeout: float | None = None):
        self.descriptor = descriptor
        self.timeout = timeout
        self.logger = get_logger(__name__).bind(source_id=descriptor.source_id)

    @property
    def source_id(self) -> str:
        return self.descriptor.source_id

    @log_extraction_step("extract")
    async def extract(self, session: SourceSession) -> list[RankedEntry]:
        descriptor = self.descriptor
        await session.navigate(descriptor.url, descriptor.ready_selector, timeout=self.timeout)
        page = session.read()

        entries = descriptor.strategy.parse(page)
        self.logger.debug("Parsed raw entries", strategy=descriptor.strategy.kind, raw_count=len(entries))

        return self.postprocess(entries)

    def postprocess(self, entries: list[RankedEntry]) -> list[RankedEntry]:
        """Apply the descriptor's reversal and top-N policy; an empty result is a failure."""
        if self.descriptor.reverse:
            entries = reverse_and_renumber(entries)
        entries = keep_top(entries, self.descriptor.top_n)

        if not entries:
            raise ExtractionFailure(self.source_id, f"No ranking entries found on {self.descriptor.url}")
        return entries
