# ABOUTME: Tests for navigation retry logic using tenacity
# ABOUTME: Transient navigation failures are retried; readiness failures and other errors are not

from unittest.mock import AsyncMock

import pytest

from langrank.extraction.base import ExtractionFailure, NavigationFailure
from langrank.utils.retry import with_navigation_retry

NO_WAIT = {"min_wait": 0, "max_wait": 0}


class TestWithNavigationRetry:
    """Test the navigation retry wrapper."""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        operation = AsyncMock(return_value="page")

        assert await with_navigation_retry(operation, **NO_WAIT) == "page"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_navigation_failure_is_retried(self):
        operation = AsyncMock(side_effect=[NavigationFailure("pypl", "reset"), "page"])

        assert await with_navigation_retry(operation, max_attempts=2, **NO_WAIT) == "page"
        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_last_failure_is_reraised(self):
        operation = AsyncMock(side_effect=NavigationFailure("pypl", "still down"))

        with pytest.raises(NavigationFailure, match="still down"):
            await with_navigation_retry(operation, max_attempts=3, **NO_WAIT)

        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_extraction_failure_is_not_retried(self):
        operation = AsyncMock(side_effect=ExtractionFailure("tiobe", "selector missing"))

        with pytest.raises(ExtractionFailure):
            await with_navigation_retry(operation, max_attempts=3, **NO_WAIT)

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        operation = AsyncMock(side_effect=KeyError("boom"))

        with pytest.raises(KeyError):
            await with_navigation_retry(operation, max_attempts=3, **NO_WAIT)

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        operation = AsyncMock(side_effect=NavigationFailure("linkedin", "blocked"))

        with pytest.raises(NavigationFailure):
            await with_navigation_retry(operation, max_attempts=1, **NO_WAIT)

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_no_attempt_starts_past_max_delay(self):
        operation = AsyncMock(side_effect=NavigationFailure("tiobe", "reset"))

        with pytest.raises(NavigationFailure):
            await with_navigation_retry(operation, max_attempts=3, max_delay=0, **NO_WAIT)

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_continue_inside_max_delay(self):
        operation = AsyncMock(side_effect=[NavigationFailure("tiobe", "reset"), "page"])

        assert await with_navigation_retry(operation, max_attempts=3, max_delay=60, **NO_WAIT) == "page"
        assert operation.await_count == 2
