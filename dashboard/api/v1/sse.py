"""Server-Sent Events (SSE) 실시간 스트림 API"""
import asyncio
import json
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from loguru import logger
from dashboard.agents.view_state import DashboardController
from dashboard.api.deps import get_controller, get_event_hub
from dashboard.services.events import EventHub, dashboard_event

router = APIRouter()

HEARTBEAT_SECONDS = 30


def _format(event: dict) -> str:
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


async def event_stream(hub: EventHub, controller: DashboardController, heartbeat: float = HEARTBEAT_SECONDS):
    """상태 변경/알림 이벤트 스트리밍 (이벤트 없으면 heartbeat 전송)"""
    queue = hub.subscribe()
    count = 0
    try:
        # 연결 직후 현재 상태 1회 전송
        yield _format(dashboard_event(controller, "state"))

        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat)
            except asyncio.TimeoutError:
                yield _format({"type": "heartbeat", "count": count})
                count += 1
                continue
            yield _format(event)
    finally:
        hub.unsubscribe(queue)
        logger.debug("SSE 구독 종료")


@router.get("/events", summary="SSE 실시간 이벤트 스트림")
async def sse_endpoint(
    controller: DashboardController = Depends(get_controller),
    hub: EventHub = Depends(get_event_hub),
):
    """
    Server-Sent Events 스트림.
    상태 변경(state), 예측 실패 알림(alert), 최적화 시작 안내(notice) 수신.
    """
    return StreamingResponse(
        event_stream(hub, controller),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
            "Access-Control-Allow-Origin": "*",
        },
    )
