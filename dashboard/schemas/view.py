"""화면 스냅샷 Pydantic 스키마 (프레젠테이션 계층이 읽는 읽기 전용 값)"""
from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Any, Optional
from dashboard.schemas.recommendation import Market, Recommendation
from dashboard.schemas.prediction import GraphPoint, Prediction


class Language(str, Enum):
    KO = "ko"
    EN = "en"


class RecommendationRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    display_name: str
    badges: list[str]
    signal: str
    score_label: str
    price_label: str
    pe_label: Optional[str] = None
    margin_label: Optional[str] = None
    summary: str


class HeadlineRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    source: str
    date_label: str


class SentimentPanel(BaseModel):
    model_config = ConfigDict(frozen=True)

    sentiment: str
    tag: str
    score_label: str
    sources: Optional[list[str]] = None
    headlines: list[HeadlineRow]
    empty_message: Optional[str] = None


class PredictionPanel(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    outlook: Optional[str] = None
    outlook_color: str
    current_price_label: str
    target_price_label: str
    potential: str
    trend_color: str
    graph_data: list[GraphPoint]
    reasoning: str
    news: Optional[SentimentPanel] = None


class DashboardSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    market: Market
    ticker: str
    language: Language
    loading_recs: bool
    loading_predict: bool
    recommendations: list[Recommendation]
    rows: list[RecommendationRow]
    prediction: Optional[Prediction] = None
    panel: Optional[PredictionPanel] = None
    optimization_status: Optional[Any] = None
    labels: dict[str, str]
