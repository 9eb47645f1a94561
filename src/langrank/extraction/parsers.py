# ABOUTME: Parsing strategies that turn a loaded page into ranked entries
# ABOUTME: Table traversal for structured sources, numbered-list matching for article-style sources

import re
from dataclasses import dataclass
from typing import ClassVar, Protocol

from bs4 import BeautifulSoup

from langrank.extraction.base import RankedEntry

# "<digits>. <token>" as it appears in article headings such as "3. Python"
NUMBERED_LIST_PATTERN = re.compile(r"\d+\.\s+([A-Za-z\+\#]+)")

_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]

# Elements that start a new line in rendered text; everything else flows inline
_LINE_BREAKING_TAGS = [
    "address", "article", "aside", "blockquote", "br", "caption", "dd", "details", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hr", "li", "main", "nav", "ol", "option", "p", "pre", "section", "summary", "table", "tbody", "td",
    "tfoot", "th", "thead", "tr", "ul",
]  # fmt: skip


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


class LoadedPage:
    """DOM snapshot of a navigated page, read once per extraction.

    Text is read the way a browser lays it out: inline elements join their
    neighbours without a gap (``C<b>++</b>`` reads ``C++``) and only
    line-breaking elements separate words.
    """

    def __init__(self, url: str, html: str):
        self.url = url
        self.html = html
        self._soup = BeautifulSoup(html, "html.parser")
        for tag in self._soup(_INVISIBLE_TAGS):
            tag.decompose()
        for tag in self._soup(_LINE_BREAKING_TAGS):
            tag.insert_before("\n")
            tag.insert_after("\n")

    @property
    def body_text(self) -> str:
        """Visible text of the document body."""
        root = self._soup.body or self._soup
        return root.get_text()

    def select_rows(self, selector: str) -> list[list[str]]:
        """Cell texts (``td`` elements) for every row matching ``selector``."""
        return [
            [_collapse_whitespace(cell.get_text()) for cell in row.find_all("td")]
            for row in self._soup.select(selector)
        ]


class ParsingStrategy(Protocol):
    kind: ClassVar[str]

    def parse(self, page: LoadedPage) -> list[RankedEntry]: ...


@dataclass(frozen=True)
class TableStrategy:
    """Read rank and label from fixed column offsets of a table's body rows."""

    kind: ClassVar[str] = "table"

    row_selector: str
    rank_column: int
    label_column: int
    min_columns: int

    def parse(self, page: LoadedPage) -> list[RankedEntry]:
        entries: list[RankedEntry] = []
        for cells in page.select_rows(self.row_selector):
            if len(cells) < self.min_columns:
                continue
            rank_text = cells[self.rank_column].strip()
            label = cells[self.label_column].strip()
            # header-like or decorative rows carry no numeric rank
            if not rank_text.isdecimal() or int(rank_text) < 1 or not label:
                continue
            entries.append(RankedEntry(rank=int(rank_text), label=label))
        return entries


@dataclass(frozen=True)
class PatternStrategy:
    """Match a numbered-list pattern over the body text; rank follows match order."""

    kind: ClassVar[str] = "pattern"

    pattern: re.Pattern[str] = NUMBERED_LIST_PATTERN

    def parse(self, page: LoadedPage) -> list[RankedEntry]:
        return [
            RankedEntry(rank=index, label=match.group(1))
            for index, match in enumerate(self.pattern.finditer(page.body_text), start=1)
        ]


def reverse_and_renumber(entries: list[RankedEntry]) -> list[RankedEntry]:
    """Reverse a bottom-to-top listing and number it contiguously from 1."""
    return [RankedEntry(rank=index, label=entry.label) for index, entry in enumerate(reversed(entries), start=1)]


def keep_top(entries: list[RankedEntry], top_n: int | None) -> list[RankedEntry]:
    """Keep entries ranked within ``top_n``; ``None`` passes everything through."""
    if top_n is None:
        return list(entries)
    return [entry for entry in entries if entry.rank <= top_n]
