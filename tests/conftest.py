# ABOUTME: Shared fakes for the browser engine so pipeline tests never touch the network
# ABOUTME: Fake sessions serve canned HTML by URL and record their open/close lifecycle

from __future__ import annotations

import pytest

from langrank.extraction.base import NavigationFailure
from langrank.extraction.parsers import LoadedPage


class FakeSession:
    """Stands in for SourceSession: serves HTML from a dict keyed by URL."""

    def __init__(self, source_id: str, pages: dict[str, str]):
        self.source_id = source_id
        self.pages = pages
        self.opened = False
        self.closed = False
        self.navigations: list[tuple[str, str, float | None]] = []
        self._page: LoadedPage | None = None

    async def __aenter__(self) -> FakeSession:
        self.opened = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.closed = True

    async def navigate(self, url: str, ready_selector: str = "body", timeout: float | None = None) -> None:
        self.navigations.append((url, ready_selector, timeout))
        if url not in self.pages:
            raise NavigationFailure(self.source_id, f"{url} is unreachable")
        self._page = LoadedPage(url=url, html=self.pages[url])

    def read(self) -> LoadedPage:
        assert self._page is not None, "read() before navigate()"
        return self._page


class FakeEngine:
    """Stands in for BrowserEngine: leases one FakeSession per call."""

    def __init__(self, pages: dict[str, str] | None = None):
        self.pages = pages or {}
        self.sessions: list[FakeSession] = []

    def session(self, source_id: str) -> FakeSession:
        session = FakeSession(source_id, self.pages)
        self.sessions.append(session)
        return session


def table_html(rows: list[list[str]], table_attrs: str = "") -> str:
    body = "".join("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows)
    return f"<html><body><table {table_attrs}><thead><tr><th>#</th></tr></thead><tbody>{body}</tbody></table></body></html>"


def numbered_article_html(labels: list[str]) -> str:
    items = "".join(f"<h3>{index}. {label}</h3><p>Why {label} matters.</p>" for index, label in enumerate(labels, 1))
    return f"<html><body><script>var x = '9. Hidden';</script><article>{items}</article></body></html>"


@pytest.fixture
def fake_engine():
    return FakeEngine


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def make_table_html():
    return table_html


@pytest.fixture
def make_article_html():
    return numbered_article_html
