# ABOUTME: Tests for the crawl4ai-backed BrowserEngine and SourceSession
# ABOUTME: Uses a mocked AsyncWebCrawler so no real browser is launched

from unittest.mock import AsyncMock, MagicMock

import pytest

from langrank.extraction.base import BrowserEngineError, ExtractionFailure, NavigationFailure
from langrank.extraction.session import BrowserEngine, SourceSession

PAGE_HTML = "<html><body><table><tbody><tr><td>1</td></tr></tbody></table></body></html>"


@pytest.fixture
def mock_crawler():
    crawler = MagicMock()
    crawler.start = AsyncMock()
    crawler.close = AsyncMock()
    crawler.arun = AsyncMock(return_value=MagicMock(success=True, html=PAGE_HTML, error_message=None))
    crawler.crawler_strategy.kill_session = AsyncMock()
    return crawler


class TestSourceSession:
    """Test navigation, readiness mapping and page release."""

    @pytest.mark.asyncio
    async def test_navigate_passes_session_and_readiness_to_crawler(self, mock_crawler):
        async with SourceSession(mock_crawler, "pypl") as session:
            await session.navigate("https://pypl.github.io/PYPL.html", "table", timeout=30.0)

        call = mock_crawler.arun.await_args
        assert call.kwargs["url"] == "https://pypl.github.io/PYPL.html"
        run_config = call.kwargs["config"]
        assert run_config.session_id == session.session_id
        assert run_config.wait_for == "css:table"
        # 90% of the 30s window, split over the default two attempts
        assert run_config.page_timeout == 13500

    @pytest.mark.asyncio
    async def test_read_returns_loaded_dom(self, mock_crawler):
        async with SourceSession(mock_crawler, "pypl") as session:
            await session.navigate("https://pypl.github.io/PYPL.html", "table")
            page = session.read()

        assert page.html == PAGE_HTML
        assert page.select_rows("table tbody tr") == [["1"]]

    @pytest.mark.asyncio
    async def test_session_ids_are_unique_per_lease(self, mock_crawler):
        first = SourceSession(mock_crawler, "tiobe")
        second = SourceSession(mock_crawler, "tiobe")

        assert first.session_id != second.session_id
        assert first.session_id.startswith("tiobe-")

    @pytest.mark.asyncio
    async def test_read_before_navigate_fails(self, mock_crawler):
        async with SourceSession(mock_crawler, "tiobe") as session:
            with pytest.raises(ExtractionFailure, match="never loaded"):
                session.read()

    @pytest.mark.asyncio
    async def test_navigate_on_closed_session_fails(self, mock_crawler):
        session = SourceSession(mock_crawler, "tiobe")

        with pytest.raises(ExtractionFailure, match="not open"):
            await session.navigate("https://www.tiobe.com/tiobe-index/")

        mock_crawler.arun.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unmet_readiness_selector_is_extraction_failure(self, mock_crawler):
        mock_crawler.arun.return_value = MagicMock(
            success=False, html="", error_message="Wait condition failed: Timeout after 30000ms waiting for selector '.table-top20'"
        )

        async with SourceSession(mock_crawler, "tiobe", navigation_attempts=1) as session:
            with pytest.raises(ExtractionFailure, match="Readiness selector"):
                await session.navigate("https://www.tiobe.com/tiobe-index/", ".table-top20")

    @pytest.mark.asyncio
    async def test_crawl_error_is_navigation_failure(self, mock_crawler):
        mock_crawler.arun.return_value = MagicMock(success=False, html="", error_message="net::ERR_NAME_NOT_RESOLVED")

        async with SourceSession(mock_crawler, "linkedin", navigation_attempts=1) as session:
            with pytest.raises(NavigationFailure) as exc_info:
                await session.navigate("https://www.linkedin.com/pulse/x")

        assert exc_info.value.source_id == "linkedin"

    @pytest.mark.asyncio
    async def test_crawler_exception_is_navigation_failure(self, mock_crawler):
        mock_crawler.arun.side_effect = RuntimeError("browser crashed")

        async with SourceSession(mock_crawler, "linkedin", navigation_attempts=1) as session:
            with pytest.raises(NavigationFailure, match="browser crashed"):
                await session.navigate("https://www.linkedin.com/pulse/x")

    @pytest.mark.asyncio
    async def test_empty_result_is_navigation_failure(self, mock_crawler):
        mock_crawler.arun.return_value = None

        async with SourceSession(mock_crawler, "linkedin", navigation_attempts=1) as session:
            with pytest.raises(NavigationFailure, match="no result"):
                await session.navigate("https://www.linkedin.com/pulse/x")

    @pytest.mark.asyncio
    async def test_readiness_failure_is_not_retried(self, mock_crawler):
        mock_crawler.arun.return_value = MagicMock(
            success=False, html="", error_message="Wait condition failed for selector 'table'"
        )

        async with SourceSession(mock_crawler, "pypl", navigation_attempts=3) as session:
            with pytest.raises(ExtractionFailure):
                await session.navigate("https://pypl.github.io/PYPL.html", "table")

        assert mock_crawler.arun.await_count == 1

    @pytest.mark.asyncio
    async def test_single_attempt_gets_the_whole_navigation_window(self, mock_crawler):
        async with SourceSession(mock_crawler, "pypl", navigation_attempts=1) as session:
            await session.navigate("https://pypl.github.io/PYPL.html", "table", timeout=30.0)

        assert mock_crawler.arun.await_args.kwargs["config"].page_timeout == 27000

    @pytest.mark.asyncio
    async def test_no_retry_once_the_window_cannot_fit_another_attempt(self, mock_crawler):
        mock_crawler.arun.return_value = MagicMock(success=False, html="", error_message="net::ERR_CONNECTION_RESET")

        async with SourceSession(mock_crawler, "linkedin", navigation_attempts=3) as session:
            with pytest.raises(NavigationFailure):
                await session.navigate("https://www.linkedin.com/pulse/x", timeout=0.5)

        # the first backoff alone outlasts a half-second window
        assert mock_crawler.arun.await_count == 1

    @pytest.mark.asyncio
    async def test_close_releases_page_once(self, mock_crawler):
        session = await SourceSession(mock_crawler, "pypl").open()

        await session.close()
        await session.close()

        mock_crawler.crawler_strategy.kill_session.assert_awaited_once_with(session.session_id)
        assert session.is_open is False

    @pytest.mark.asyncio
    async def test_close_survives_release_error(self, mock_crawler):
        mock_crawler.crawler_strategy.kill_session.side_effect = RuntimeError("page already gone")
        session = await SourceSession(mock_crawler, "pypl").open()

        await session.close()

        assert session.is_open is False

    @pytest.mark.asyncio
    async def test_context_manager_closes_on_error(self, mock_crawler):
        with pytest.raises(ValueError):
            async with SourceSession(mock_crawler, "pypl") as session:
                raise ValueError("boom")

        assert session.is_open is False
        mock_crawler.crawler_strategy.kill_session.assert_awaited_once()


class TestBrowserEngine:
    """Test engine lifecycle and session leasing."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, mock_crawler):
        async with BrowserEngine(crawler=mock_crawler) as engine:
            session = engine.session("pypl")

        mock_crawler.start.assert_awaited_once()
        mock_crawler.close.assert_awaited_once()
        assert isinstance(session, SourceSession)

    @pytest.mark.asyncio
    async def test_sessions_inherit_navigation_attempts(self, mock_crawler):
        async with BrowserEngine(crawler=mock_crawler, navigation_attempts=4) as engine:
            session = engine.session("pypl")

        assert session.navigation_attempts == 4

    @pytest.mark.asyncio
    async def test_session_before_start_fails(self, mock_crawler):
        engine = BrowserEngine(crawler=mock_crawler)

        with pytest.raises(BrowserEngineError, match="not running"):
            engine.session("pypl")

    @pytest.mark.asyncio
    async def test_start_failure_is_browser_engine_error(self, mock_crawler):
        mock_crawler.start.side_effect = RuntimeError("Executable doesn't exist")
        engine = BrowserEngine(crawler=mock_crawler)

        with pytest.raises(BrowserEngineError, match="failed to start"):
            await engine.start()

        with pytest.raises(BrowserEngineError):
            engine.session("pypl")

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self, mock_crawler):
        await BrowserEngine(crawler=mock_crawler).stop()

        mock_crawler.close.assert_not_awaited()
