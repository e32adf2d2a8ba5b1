"""
Retry utilities for the roll-call service.

This module provides retry and backoff utilities used by adapters
that talk to remote collaborators (directory, Home Assistant, MQTT).
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar
from rollcall.observability.logging_setup import get_logger

T = TypeVar('T')

log = get_logger("rollcall.retry")

def backoff_delay(attempt: int, base: float, max_delay: float) -> float:
    """
    지수 백오프 지연 시간을 계산합니다.
    
    Args:
        attempt: 현재 시도 횟수 (1부터 시작)
        base: 기본 지연 시간 (초)
        max_delay: 최대 지연 시간 (초)
    """
    return min(max_delay, base * (2 ** max(0, attempt - 1)))

async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    jitter: bool = True,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
) -> T:
    """
    지수 백오프와 함께 함수를 재시도합니다.
    
    Args:
        func: 재시도할 비동기 함수
        max_retries: 최대 재시도 횟수
        base_delay: 기본 지연 시간 (초)
        max_delay: 최대 지연 시간 (초)
        jitter: 지터 적용 여부
        retry_on: 재시도 대상 예외 타입 (그 외 예외는 즉시 전파)
        sleep: 대기 함수 (테스트용 주입, 기본 asyncio.sleep)
        
    Returns:
        함수 실행 결과
        
    Raises:
        마지막 시도에서 발생한 예외
    """
    sleep = sleep or asyncio.sleep
    
    for attempt in range(1, max_retries + 2):  # +2 because we try once + max_retries
        try:
            return await func()
        except retry_on as e:
            if attempt > max_retries:
                raise
            
            delay = backoff_delay(attempt, base_delay, max_delay)
            if jitter:
                delay = delay * (0.5 + random.random() * 0.5)
            
            log.warning(f"재시도 예정 attempt:{attempt} delay:{delay:.2f}s error:{e}")
            await sleep(delay)
    
    raise AssertionError("unreachable")
