# ABOUTME: Rendering-independent report model and the assembler that builds it
# ABOUTME: Missing header fields fall back to documented defaults instead of failing

from collections.abc import Sequence
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from langrank.core.models import CombinedRow, ComparisonAxis
from langrank.extraction.base import RankingError
from langrank.utils.logging import get_logger

DEFAULT_TITLE = "Programming Languages Report"
DEFAULT_SUBTITLE = "Popularity, Salaries and Learning Difficulty"

logger = get_logger(__name__)


class AssemblyFailure(RankingError):
    """A required report field was missing or blank; recovered by substituting its default."""


def _require_text(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise AssemblyFailure(f"Report {field} is missing or blank")
    return value.strip()


def _text_or_default(field: str, value: str | None, default: str) -> str:
    try:
        return _require_text(field, value)
    except AssemblyFailure as e:
        logger.debug("Substituting report default", field=field, default=default, reason=str(e))
        return default


_HEADER_DEFAULTS = {"title": DEFAULT_TITLE, "subtitle": DEFAULT_SUBTITLE}


class HeaderOptions(BaseModel):
    """Header block shown at the top of every page.

    A missing or blank title or subtitle is replaced by its default however
    the header is built.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str = DEFAULT_TITLE
    subtitle: str = DEFAULT_SUBTITLE
    show_logo: bool = True
    show_date: bool = True
    generated_on: date = Field(default_factory=date.today)

    @field_validator("title", "subtitle", mode="before")
    @classmethod
    def _default_blank_text(cls, value, info: ValidationInfo):
        if value is None or isinstance(value, str):
            return _text_or_default(info.field_name, value, _HEADER_DEFAULTS[info.field_name])
        return value


class ReportSection(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    heading: str
    column_labels: tuple[str, str]
    rows: tuple[CombinedRow, ...] = ()


class ReportModel(BaseModel):
    """The pipeline's only output: header plus the comparison sections in fixed order."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    header: HeaderOptions
    sections: tuple[ReportSection, ...]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


SECTION_LAYOUT: dict[ComparisonAxis, tuple[str, tuple[str, str]]] = {
    ComparisonAxis.POPULARITY: ("Popularity Ranking", ("PYPL", "TIOBE")),
    ComparisonAxis.COMPENSATION: ("Highest Paying Ranking", ("GeeksforGeeks", "WithCodeExample")),
    ComparisonAxis.LEARNING_DIFFICULTY: (
        "Learning Difficulty Ranking",
        ("Easiest (Digitalogy)", "Hardest (LinkedIn)"),
    ),
}


def build_header(
    title: str | None = None,
    subtitle: str | None = None,
    show_logo: bool | None = None,
    show_date: bool | None = None,
    generated_on: date | None = None,
) -> HeaderOptions:
    """Build header options; anything missing or blank takes its default."""
    return HeaderOptions(
        title=title,
        subtitle=subtitle,
        show_logo=True if show_logo is None else show_logo,
        show_date=True if show_date is None else show_date,
        generated_on=generated_on or date.today(),
    )


def assemble(
    header: HeaderOptions | None,
    popularity: Sequence[CombinedRow],
    compensation: Sequence[CombinedRow],
    learning_difficulty: Sequence[CombinedRow],
) -> ReportModel:
    """Turn the three merged tables into a report model.

    Sections always appear as popularity, compensation, learning difficulty.
    An empty table still yields its section, with zero rows.
    """
    tables = {
        ComparisonAxis.POPULARITY: popularity,
        ComparisonAxis.COMPENSATION: compensation,
        ComparisonAxis.LEARNING_DIFFICULTY: learning_difficulty,
    }
    sections = tuple(
        ReportSection(heading=heading, column_labels=labels, rows=tuple(tables[axis]))
        for axis, (heading, labels) in SECTION_LAYOUT.items()
    )
    return ReportModel(header=header or build_header(), sections=sections)
