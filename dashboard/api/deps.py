"""라우터 의존성: 앱 수명 동안 유지되는 컨트롤러/이벤트 허브"""
from fastapi import HTTPException, Request
from dashboard.agents.view_state import DashboardController
from dashboard.services.events import EventHub


def get_controller(request: Request) -> DashboardController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="대시보드가 아직 시작되지 않았습니다")
    return controller


def get_event_hub(request: Request) -> EventHub:
    return request.app.state.events
