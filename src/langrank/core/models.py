# ABOUTME: Core domain models: per-source outcomes, combined table rows, progress events
# ABOUTME: SourceResult is a tagged union discriminated on status ("ok" or "failed")

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from langrank.extraction.base import RankedEntry

MISSING_LABEL = "N/A"


class SourceSuccess(BaseModel):
    """A source that produced a usable ranking."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"
    source_id: str
    entries: tuple[RankedEntry, ...]
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return True


class SourceFailure(BaseModel):
    """A source whose extraction failed; downstream it counts as an empty ranking."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    source_id: str
    cause: str
    error_type: str
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return False

    @property
    def entries(self) -> tuple[RankedEntry, ...]:
        return ()


SourceResult = Annotated[SourceSuccess | SourceFailure, Field(discriminator="status")]


class CombinedRow(BaseModel):
    """One row of a side-by-side comparison table, aligned by position."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    position: int = Field(gt=0)
    column_a: str = Field(default=MISSING_LABEL, alias="columnA")
    column_b: str = Field(default=MISSING_LABEL, alias="columnB")


class ComparisonAxis(str, Enum):
    """Comparison dimensions, in report order."""

    POPULARITY = "popularity"
    COMPENSATION = "compensation"
    LEARNING_DIFFICULTY = "learning_difficulty"


@dataclass(frozen=True)
class AxisPairing:
    """Which two sources feed the left and right columns of an axis."""

    axis: ComparisonAxis
    left_source: str
    right_source: str


AXIS_PAIRINGS: tuple[AxisPairing, ...] = (
    AxisPairing(ComparisonAxis.POPULARITY, "pypl", "tiobe"),
    AxisPairing(ComparisonAxis.COMPENSATION, "geeksforgeeks", "withcodeexample"),
    AxisPairing(ComparisonAxis.LEARNING_DIFFICULTY, "digitalogy", "linkedin"),
)


ProgressKind = Literal["started", "succeeded", "failed", "heartbeat"]


@dataclass(frozen=True)
class ProgressEvent:
    """Progress notification emitted by the orchestrator."""

    kind: ProgressKind
    completed: int
    total: int
    elapsed_seconds: float
    source_id: str | None = None
    message: str = ""
