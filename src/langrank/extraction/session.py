# ABOUTME: Crawl4AI-backed browser engine and the per-source sessions leased from it
# ABOUTME: A session owns one browser page: navigate, wait for readiness, read the DOM, close

import uuid

from crawl4ai import AsyncWebCrawler, BrowserConfig, CacheMode, CrawlerRunConfig

from langrank.extraction.base import BrowserEngineError, ExtractionFailure, NavigationFailure
from langrank.extraction.parsers import LoadedPage
from langrank.utils.logging import get_logger, log_extraction_step, suppress_library_output
from langrank.utils.retry import with_navigation_retry

BODY_SELECTOR = "body"

# Share of a caller's timeout spent in the browser; the rest covers parsing and page release
NAVIGATION_SHARE = 0.9


def attempt_budget(timeout: float | None, attempts: int) -> float | None:
    """Seconds one navigation attempt may take, page load and readiness wait included."""
    if timeout is None:
        return None
    return timeout * NAVIGATION_SHARE / max(attempts, 1)


class BrowserEngine:
    """Shared headless browser. Sessions are leased per task and never reused."""

    def __init__(self, headless: bool = True, navigation_attempts: int = 2, crawler: AsyncWebCrawler | None = None):
        self.headless = headless
        self.navigation_attempts = navigation_attempts
        self.crawler = crawler  # Allow for dependency injection
        self.logger = get_logger(__name__)
        self._started = False

    async def start(self) -> None:
        if self._started:
            return
        if self.crawler is None:
            self.crawler = AsyncWebCrawler(config=BrowserConfig(headless=self.headless, verbose=False))
        try:
            # crawl4ai prints a banner on startup
            with suppress_library_output():
                await self.crawler.start()
        except Exception as e:
            self.logger.error("Browser engine failed to start", error=str(e), error_type=type(e).__name__)
            raise BrowserEngineError(f"Browser engine failed to start: {e}") from e
        self._started = True
        self.logger.info("Browser engine started", headless=self.headless)

    async def stop(self) -> None:
        if not self._started or self.crawler is None:
            return
        try:
            await self.crawler.close()
        finally:
            self._started = False
            self.logger.info("Browser engine stopped")

    async def __aenter__(self) -> "BrowserEngine":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    def session(self, source_id: str) -> "SourceSession":
        """Lease a fresh session (one browser page) for a single source."""
        if not self._started or self.crawler is None:
            raise BrowserEngineError("Browser engine is not running")
        return SourceSession(self.crawler, source_id, navigation_attempts=self.navigation_attempts)


class SourceSession:
    """One browser page bound to one source for the lifetime of its extraction."""

    def __init__(self, crawler: AsyncWebCrawler, source_id: str, navigation_attempts: int = 2):
        self.crawler = crawler
        self.source_id = source_id
        self.navigation_attempts = navigation_attempts
        self.session_id = f"{source_id}-{uuid.uuid4().hex[:8]}"
        self.logger = get_logger(__name__).bind(source_id=source_id, session_id=self.session_id)
        self.is_open = False
        self._page: LoadedPage | None = None

    async def open(self) -> "SourceSession":
        # crawl4ai creates the page lazily on the first run that names this session_id
        self.is_open = True
        self.logger.debug("Session opened")
        return self

    @log_extraction_step("navigate")
    async def navigate(self, url: str, ready_selector: str = BODY_SELECTOR, timeout: float | None = None) -> None:
        """Load ``url`` and wait until ``ready_selector`` exists.

        The session itself imposes no navigation ceiling; ``timeout`` (seconds)
        is passed down by the caller when one is wanted. It is split across
        the navigation attempts so every attempt, including a readiness wait
        that runs out, ends inside it.
        """
        if not self.is_open:
            raise ExtractionFailure(self.source_id, "Session is not open")

        budget = attempt_budget(timeout, self.navigation_attempts)
        run_config = CrawlerRunConfig(
            session_id=self.session_id,
            wait_for=f"css:{ready_selector}",
            wait_until="networkidle",
            cache_mode=CacheMode.BYPASS,
            verbose=False,
            **({"page_timeout": max(1, int(budget * 1000))} if budget is not None else {}),
        )

        async def attempt() -> LoadedPage:
            return await self._crawl(url, ready_selector, run_config)

        # a retry is only started if it can still finish inside the window
        max_delay = None if budget is None else timeout * NAVIGATION_SHARE - budget
        self._page = await with_navigation_retry(attempt, max_attempts=self.navigation_attempts, max_delay=max_delay)

    async def _crawl(self, url: str, ready_selector: str, run_config: CrawlerRunConfig) -> LoadedPage:
        self.logger.debug("Navigating", url=url, ready_selector=ready_selector)
        try:
            result = await self.crawler.arun(url=url, config=run_config)
        except Exception as e:
            raise NavigationFailure(self.source_id, f"Navigation to {url} failed: {e}") from e

        if not result:
            raise NavigationFailure(self.source_id, f"Navigation to {url} returned no result")

        if not result.success:
            message = result.error_message or "unknown crawl error"
            # crawl4ai reports an unmet wait_for condition through the same error channel
            if "wait" in message.lower() and ready_selector in message:
                raise ExtractionFailure(self.source_id, f"Readiness selector {ready_selector!r} never appeared")
            raise NavigationFailure(self.source_id, f"Navigation to {url} failed: {message}")

        html = result.html or ""
        self.logger.debug("Page loaded", url=url, content_length=len(html))
        return LoadedPage(url=url, html=html)

    def read(self) -> LoadedPage:
        """Return the DOM of the last successful navigation."""
        if self._page is None:
            raise ExtractionFailure(self.source_id, "Nothing to read: page was never loaded")
        return self._page

    async def close(self) -> None:
        """Release the browser page. Safe to call more than once."""
        if not self.is_open:
            return
        self.is_open = False
        self._page = None
        try:
            await self.crawler.crawler_strategy.kill_session(self.session_id)
        except Exception as e:
            self.logger.warning("Failed to release browser page", error=str(e), error_type=type(e).__name__)
        else:
            self.logger.debug("Session closed")

    async def __aenter__(self) -> "SourceSession":
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
