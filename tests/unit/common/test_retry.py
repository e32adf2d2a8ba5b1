"""
Common 모듈 단위 테스트

이 모듈은 재시도/백오프 로직의 기능을 테스트합니다.
"""

import pytest
from unittest.mock import AsyncMock
from rollcall.common.retry import backoff_delay, retry_with_backoff


class TestBackoffDelay:
    """백오프 지연 계산 테스트"""

    def test_doubles_until_cap(self):
        assert [backoff_delay(a, 0.5, 3.0) for a in range(1, 6)] == [0.5, 1.0, 2.0, 3.0, 3.0]


class TestRetryWithBackoff:
    """재시도 로직 테스트"""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        func = AsyncMock(return_value="ok")
        sleep = AsyncMock()

        assert await retry_with_backoff(func, sleep=sleep) == "ok"
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_after_failures(self):
        func = AsyncMock(side_effect=[ConnectionError(), ConnectionError(), "ok"])
        sleep = AsyncMock()

        result = await retry_with_backoff(func, max_retries=3, base_delay=1.0, jitter=False, sleep=sleep)

        assert result == "ok"
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        """최대 재시도 후 마지막 예외 전파"""
        func = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(ConnectionError, match="down"):
            await retry_with_backoff(func, max_retries=2, sleep=AsyncMock())

        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_error_propagates(self):
        func = AsyncMock(side_effect=ValueError("bad payload"))

        with pytest.raises(ValueError):
            await retry_with_backoff(func, retry_on=(ConnectionError,), sleep=AsyncMock())

        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_jitter_bounds(self):
        func = AsyncMock(side_effect=[ConnectionError(), "ok"])
        sleep = AsyncMock()

        await retry_with_backoff(func, base_delay=2.0, jitter=True, sleep=sleep)

        assert 1.0 <= sleep.await_args.args[0] <= 2.0
