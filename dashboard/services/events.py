"""프로세스 내부 이벤트 허브 (SSE 구독자별 asyncio 큐)"""
import asyncio
from typing import Any, Optional
from loguru import logger

MAX_QUEUED_EVENTS = 100


class EventHub:
    def __init__(self):
        self._subscribers: set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=MAX_QUEUED_EVENTS)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def publish(self, event: dict) -> None:
        for queue in list(self._subscribers):
            if queue.full():
                _make_room(queue)
            queue.put_nowait(event)


def _make_room(queue: asyncio.Queue) -> None:
    """
    가득 찬 큐 정리: state 는 최신 스냅샷 하나만 남기고 제거.
    그래도 자리가 없으면 가장 오래된 이벤트를 버림 (alert/notice 보존 우선)
    """
    pending = []
    while not queue.empty():
        pending.append(queue.get_nowait())
    states = [event for event in pending if event.get("type") == "state"]
    kept = [event for event in pending if event.get("type") != "state" or event is states[-1]]
    if len(kept) >= queue.maxsize:
        dropped = kept.pop(0)
        logger.warning(f"구독자 큐 가득 참, 오래된 이벤트 누락: {dropped.get('type')}")
    else:
        logger.debug(f"구독자 큐 가득 참, 이전 state 이벤트 {len(pending) - len(kept)}건 정리")
    for event in kept:
        queue.put_nowait(event)


def dashboard_event(controller: Any, kind: str, message: Optional[str] = None) -> dict:
    """컨트롤러 이벤트 → SSE 페이로드 (state 는 최신 스냅샷 포함)"""
    if kind == "state":
        return {"type": "state", "data": controller.snapshot().model_dump(mode="json")}
    return {"type": kind, "message": message}
