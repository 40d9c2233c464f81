"""예측 및 뉴스 감성 관련 Pydantic 스키마"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Union


class GraphPoint(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    day: Union[str, int]
    price: Optional[float] = None


class Headline(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    title: Optional[str] = None
    title_en: Optional[str] = None
    link: str
    source: Optional[str] = None
    published: Optional[str] = None


class NewsSentiment(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    sentiment: str
    score: float = 0.0
    sources: Optional[list[str]] = None
    headlines: list[Headline] = Field(default_factory=list)
    message: Optional[str] = None


class Prediction(BaseModel):
    """예측 결과 + 뉴스 감성 (predict 응답의 두 필드를 병합한 값)"""
    model_config = ConfigDict(frozen=True, extra="allow")

    outlook: Optional[str] = None
    current_price: Optional[float] = None
    predicted_price_7d: Optional[float] = None
    graph_data: list[GraphPoint] = Field(default_factory=list)
    reasoning: str = ""
    news_sentiment: Optional[NewsSentiment] = None


class PredictResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    prediction: dict[str, Any]
    news_sentiment: Optional[dict[str, Any]] = None

    def merged(self) -> Prediction:
        return Prediction.model_validate({**self.prediction, "news_sentiment": self.news_sentiment})


class PredictRequest(BaseModel):
    ticker: str
