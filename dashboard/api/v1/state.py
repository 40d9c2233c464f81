"""대시보드 상태 API 라우터"""
from fastapi import APIRouter, Depends
from dashboard.agents.view_state import DashboardController
from dashboard.api.deps import get_controller
from dashboard.schemas.intent import OptimizationRunResponse
from dashboard.schemas.view import DashboardSnapshot

router = APIRouter()


@router.get("/state", response_model=DashboardSnapshot, summary="현재 화면 상태")
async def get_state(controller: DashboardController = Depends(get_controller)):
    """시장/종목/추천/예측/로딩 상태와 표시용 파생값, 현재 언어의 문구 반환"""
    return controller.snapshot()


@router.post("/language/toggle", response_model=DashboardSnapshot, summary="언어 전환 (ko ↔ en)")
async def toggle_language(controller: DashboardController = Depends(get_controller)):
    controller.toggle_language()
    return controller.snapshot()


@router.post("/optimization/run", response_model=OptimizationRunResponse, summary="최적화(Evolution) 실행")
async def run_optimization(controller: DashboardController = Depends(get_controller)):
    """백엔드에 최적화 실행을 요청하고 즉시 상태를 재조회 (완료를 기다리지 않음)"""
    success = await controller.start_optimization()
    return {"success": success, "state": controller.snapshot()}
