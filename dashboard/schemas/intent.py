"""화면 의도(요청 바디) Pydantic 스키마"""
from pydantic import BaseModel
from typing import Optional
from dashboard.schemas.recommendation import Market
from dashboard.schemas.view import DashboardSnapshot


class MarketRequest(BaseModel):
    market: Market


class TickerRequest(BaseModel):
    ticker: str


class PredictIntent(BaseModel):
    # 생략 시 현재 입력된 ticker 로 예측
    ticker: Optional[str] = None


class OptimizationRunResponse(BaseModel):
    success: bool
    state: DashboardSnapshot
