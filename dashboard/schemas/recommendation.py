"""추천 관련 Pydantic 스키마"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Market(str, Enum):
    KR = "KR"
    US = "US"


class KeyMetrics(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    pe: Optional[float] = Field(default=None, alias="P/E")
    profit_margin: Optional[float] = Field(default=None, alias="Profit Margin")


class Fundamental(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    badges: list[str] = Field(default_factory=list)
    key_metrics: KeyMetrics = Field(default_factory=KeyMetrics)
    insights: list[str] = Field(default_factory=list)


class Analysis(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    signal: str = ""
    score: Optional[float] = None
    current_price: Optional[float] = None
    details: list[str] = Field(default_factory=list)
    fundamental: Optional[Fundamental] = None


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    ticker: str
    name: Optional[str] = None
    total_score: Optional[float] = None
    analysis: Analysis


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    recommendations: Optional[list[Recommendation]] = None
