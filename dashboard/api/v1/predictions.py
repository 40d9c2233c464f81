"""종목 입력 및 예측 API 라우터"""
from fastapi import APIRouter, Depends, HTTPException
from dashboard.agents.view_state import DashboardController, PredictOutcome
from dashboard.api.deps import get_controller
from dashboard.schemas.intent import PredictIntent, TickerRequest
from dashboard.schemas.view import DashboardSnapshot
from dashboard.services.localization import translate

router = APIRouter()


@router.post("/ticker", response_model=DashboardSnapshot, summary="종목 코드 입력")
async def set_ticker(request: TickerRequest, controller: DashboardController = Depends(get_controller)):
    """입력값을 대문자로 저장 (예측 요청은 하지 않음)"""
    controller.set_ticker(request.ticker)
    return controller.snapshot()


@router.post("/predict", response_model=DashboardSnapshot, summary="7일 주가 예측 + 뉴스 감성")
async def predict(request: PredictIntent, controller: DashboardController = Depends(get_controller)):
    """
    현재 입력된 종목(또는 바디의 ticker)으로 예측 요청.
    빈 종목은 무시하며, 백엔드 실패 시 502 와 알림 메시지를 반환합니다.
    """
    outcome = await controller.predict(request.ticker)
    if outcome == PredictOutcome.FAILED:
        raise HTTPException(status_code=502, detail=translate(controller.language, "predict_error"))
    return controller.snapshot()
