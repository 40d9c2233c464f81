"""주기 폴링 스케줄러: 최적화 상태를 일정 간격으로 재조회"""
import asyncio
from typing import Any, Awaitable, Callable, Optional
from loguru import logger
from dashboard.config.settings import settings

PollCallback = Callable[[], Awaitable[Any]]


class PollHandle:
    """start() 가 반환하는 취소 핸들"""

    def __init__(self, task: asyncio.Task):
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done()

    def cancel(self) -> None:
        # 이미 취소된 핸들에 다시 호출해도 무해
        if not self._task.done():
            self._task.cancel()


class PollingScheduler:
    """
    고정 간격 반복 타이머
    첫 실행은 interval 경과 후 (즉시 1회 조회는 호출 측 책임)
    """

    def __init__(self, interval: Optional[float] = None):
        self.interval = interval if interval is not None else settings.POLL_INTERVAL_SECONDS

    def start(self, callback: PollCallback, name: str = "optimization-status-poll") -> PollHandle:
        task = asyncio.create_task(self._run(callback), name=name)
        logger.debug(f"폴링 시작: {name} ({self.interval}초 간격)")
        return PollHandle(task)

    async def _run(self, callback: PollCallback) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await callback()
            except Exception as e:
                logger.error(f"폴링 작업 오류: {e}")
