"""추천 종목 API 라우터"""
from fastapi import APIRouter, Depends, HTTPException
from dashboard.agents.view_state import DashboardController, PredictOutcome
from dashboard.api.deps import get_controller
from dashboard.schemas.intent import MarketRequest
from dashboard.schemas.view import DashboardSnapshot
from dashboard.services.localization import translate

router = APIRouter()


@router.post("/market", response_model=DashboardSnapshot, summary="시장 선택")
async def set_market(request: MarketRequest, controller: DashboardController = Depends(get_controller)):
    """
    KR/US 시장 변경.
    선택한 시장 기준으로 추천 종목을 다시 조회하고 최적화 상태 폴링을 재시작합니다.
    입력 중인 종목과 예측 결과는 그대로 유지됩니다.
    """
    await controller.set_market(request.market)
    return controller.snapshot()


@router.post("/recommendations/refresh", response_model=DashboardSnapshot, summary="추천 종목 새로고침")
async def refresh_recommendations(controller: DashboardController = Depends(get_controller)):
    await controller.refresh_recommendations()
    return controller.snapshot()


@router.post("/recommendations/{ticker}/select", response_model=DashboardSnapshot, summary="추천 종목 선택 후 예측")
async def select_recommendation(ticker: str, controller: DashboardController = Depends(get_controller)):
    """추천 목록에서 종목 선택 → 해당 종목으로 즉시 7일 예측 요청"""
    outcome = await controller.select_recommendation(ticker)
    if outcome == PredictOutcome.FAILED:
        raise HTTPException(status_code=502, detail=translate(controller.language, "predict_error"))
    return controller.snapshot()
