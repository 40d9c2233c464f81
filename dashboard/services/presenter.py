"""뷰 상태 → 화면 행/패널 변환 (읽기 시점 계산)"""
from typing import Optional
from dashboard.schemas.recommendation import Market, Recommendation
from dashboard.schemas.prediction import Headline, NewsSentiment, Prediction
from dashboard.schemas.view import (
    HeadlineRow,
    Language,
    PredictionPanel,
    RecommendationRow,
    SentimentPanel,
)
from dashboard.services import formatting
from dashboard.services.localization import translate


def _list_price_label(rec: Recommendation, market: Market) -> str:
    symbol = formatting.currency_symbol(rec.ticker, market)
    price = rec.analysis.current_price
    if price is None:
        return f"{symbol}{formatting.NOT_AVAILABLE}"
    return f"{symbol}{formatting.group_number(price, 3)}"


def recommendation_row(rec: Recommendation, market: Market) -> RecommendationRow:
    """추천 목록 한 줄 (통화 기호는 선택된 시장으로 폴백)"""
    fundamental = rec.analysis.fundamental
    summary = ", ".join(rec.analysis.details)
    if fundamental and fundamental.insights:
        summary += " • " + ", ".join(fundamental.insights)

    return RecommendationRow(
        ticker=rec.ticker,
        display_name=rec.name or rec.ticker,
        badges=list(fundamental.badges) if fundamental else [],
        signal=rec.analysis.signal,
        score_label=formatting.score_label(rec.total_score, rec.analysis.score),
        price_label=_list_price_label(rec, market),
        pe_label=formatting.pe_label(fundamental.key_metrics.pe) if fundamental else None,
        margin_label=formatting.margin_label(fundamental.key_metrics.profit_margin) if fundamental else None,
        summary=summary,
    )


def _headline_row(headline: Headline, language: Language) -> HeadlineRow:
    return HeadlineRow(
        title=headline.title or headline.title_en or translate(language, "no_title"),
        link=headline.link,
        source=headline.source or "News",
        date_label=formatting.published_label(headline.published) or translate(language, "no_date"),
    )


def sentiment_panel(news: NewsSentiment, language: Language) -> SentimentPanel:
    empty_message = None
    if not news.headlines:
        empty_message = news.message or translate(language, "no_news_fallback")

    return SentimentPanel(
        sentiment=news.sentiment,
        tag=formatting.sentiment_tag(news.sentiment),
        score_label=formatting.sentiment_score_label(news.score),
        sources=list(news.sources) if news.sources else None,
        headlines=[_headline_row(h, language) for h in news.headlines],
        empty_message=empty_message,
    )


def prediction_panel(prediction: Prediction, ticker: str, language: Language) -> PredictionPanel:
    """
    예측 패널
    통화 기호/자릿수는 예측 응답이 아닌 현재 입력된 ticker 기준 (시장 폴백 없음)
    """
    is_krw = formatting.is_krw_ticker(ticker)
    symbol = formatting.currency_symbol(ticker)
    current = prediction.current_price
    target = prediction.predicted_price_7d

    return PredictionPanel(
        ticker=ticker,
        outlook=prediction.outlook,
        outlook_color=formatting.outlook_color(prediction.outlook),
        current_price_label=f"{symbol}{formatting.rounded_price(current, is_krw)}",
        target_price_label=f"{symbol}{formatting.rounded_price(target, is_krw)}",
        potential=formatting.potential(current, target),
        trend_color=formatting.trend_color(target, current),
        graph_data=list(prediction.graph_data),
        reasoning=prediction.reasoning,
        news=sentiment_panel(prediction.news_sentiment, language) if prediction.news_sentiment else None,
    )


def optional_panel(prediction: Optional[Prediction], ticker: str, language: Language) -> Optional[PredictionPanel]:
    if prediction is None:
        return None
    return prediction_panel(prediction, ticker, language)
