# ABOUTME: Ranked entry model, extractor protocol and the error taxonomy for source scraping
# ABOUTME: Every per-source failure derives from RankingSourceError so the orchestrator can isolate it

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from langrank.extraction.session import SourceSession


class RankedEntry(BaseModel):
    """A single (rank, language) observation from one source."""

    model_config = ConfigDict(frozen=True)

    rank: int = Field(gt=0, description="1-based rank, source-reported or inferred from extraction order")
    label: str = Field(min_length=1, description="Language name, trimmed, case as scraped")

    @field_validator("label", mode="before")
    @classmethod
    def _strip_label(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value


class RankingExtractor(Protocol):
    """Protocol for pulling a ranked sequence out of one loaded source page."""

    source_id: str

    async def extract(self, session: "SourceSession") -> list[RankedEntry]:
        """Navigate the session to the source and parse its ranking.

        Raises:
            NavigationFailure: If the page cannot be reached
            ExtractionFailure: If the page never becomes ready or yields no entries
        """
        ...


class RankingError(Exception):
    """Base class for every error raised by the ranking pipeline."""


class RankingSourceError(RankingError):
    """A failure confined to a single source; recoverable by treating the source as empty."""

    def __init__(self, source_id: str, message: str):
        super().__init__(message)
        self.source_id = source_id


class NavigationFailure(RankingSourceError):
    """Raised when a source is unreachable, times out, or hits a network error."""


class ExtractionFailure(RankingSourceError):
    """Raised when a page never becomes ready or parsing produced zero usable entries."""


class BrowserEngineError(RankingError):
    """Raised when the shared browser engine cannot be started or used at all."""
