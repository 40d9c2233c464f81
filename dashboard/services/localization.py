"""화면 문구 다국어(ko/en) 매핑 서비스"""
import locale
import os
from typing import Optional
from dashboard.config.settings import settings
from dashboard.schemas.view import Language

TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.KO: {
        "title": "주식 투자 어드바이저",
        "subtitle_1": "1. 추천종목 확인 하거나,",
        "subtitle_2": "2. 종목을 입력해서 지표 및 최신 뉴스 확인 기능",
        "language_toggle": "🇺🇸 English",
        "ai_recs": "AI 추천 종목",
        "scan_msg": "AI가 기술적 지표(이평선, RSI)와 기업 가치(P/E, 이익률)를 종합 분석해 상승 확률이 높은 종목을 엄선했습니다. (Buy 신호 우선)",
        "refresh_btn": "새로고침",
        "scanning": "시장 데이터 스캔 중... 잠시만 기다려주세요...",
        "no_bullish": "주요 30개 종목 스캔 중... 강력한 매수 신호가 아직 없습니다.",
        "prediction_title": "🔮 주가 예측 & 인사이트",
        "prediction_desc": "과거 30일 패턴과 최신 뉴스(Reuters, Bloomberg 등)를 분석해 향후 7일간의 주가 흐름을 예측합니다.",
        "input_placeholder": "종목코드 입력 (예: AAPL, 005930.KS)",
        "predict_btn": "예측하기",
        "analyzing_btn": "분석 중...",
        "outlook_label": "전망:",
        "current_price": "현재가",
        "target_price": "목표가 (7일)",
        "potential": "예상 수익률",
        "based_on": "최근 30일간의 선형 회귀(Linear Regression) 추세 기반",
        "ai_reasoning": "💡 AI 분석 결과:",
        "news_sentiment": "📰 최신 뉴스 감성 분석",
        "last_30_days": "( 최근 30일 )",
        "disclaimer": "⚠️ 투자 판단은 본인 책임! 수익은 보장되지 않아요.",
        "total_score": "종합 점수",
        "price_label": "주가",
        "pe_label": "P/E",
        "margin_label": "이익률",
        "sources_label": "출처:",
        "no_title": "제목 없음",
        "no_date": "날짜 없음",
        "no_news_fallback": "최근 30일간 뉴스 없음",
        "predict_error": "예측 데이터를 가져오지 못했습니다.",
        "optimization_started": "최적화(Evolution)를 시작했습니다!",
    },
    Language.EN: {
        "title": "Stock Investment Advisor",
        "subtitle_1": "1. Check recommended stocks,",
        "subtitle_2": "2. Or enter a ticker for analysis & news.",
        "language_toggle": "🇰🇷 한국어",
        "ai_recs": "AI Recommendations",
        "scan_msg": "AI analyzes technical indicators (RSI, MA) and fundamentals (P/E) to select stocks with high upside potential. (Buy signals prioritized)",
        "refresh_btn": "Refresh",
        "scanning": "Scanning market data... Please wait...",
        "no_bullish": "Scanning 30+ major stocks... No bullish signals found yet.",
        "prediction_title": "🔮 Price Prediction & Insight",
        "prediction_desc": "Predicts 7-day price trends based on 30-day patterns and latest news (Reuters, Bloomberg, etc).",
        "input_placeholder": "Enter Ticker (e.g. AAPL)",
        "predict_btn": "Predict",
        "analyzing_btn": "Analyzing...",
        "outlook_label": "Outlook:",
        "current_price": "Current Price",
        "target_price": "Target Price (7d)",
        "potential": "Potential",
        "based_on": "Based on Linear Regression trend of last 30 days.",
        "ai_reasoning": "💡 AI Reasoning:",
        "news_sentiment": "📰 Latest News Sentiment",
        "last_30_days": "( Last 30 Days )",
        "disclaimer": "⚠️ Investment decisions are your responsibility. Returns are not guaranteed.",
        "total_score": "Total Score",
        "price_label": "Price",
        "pe_label": "P/E",
        "margin_label": "Margin",
        "sources_label": "Sources:",
        "no_title": "No Title",
        "no_date": "No Date",
        "no_news_fallback": "No news found in the last 30 days.",
        "predict_error": "Error fetching prediction",
        "optimization_started": "Optimization (Evolution) started!",
    },
}


def client_locale() -> Optional[str]:
    """클라이언트 로케일 (설정값 > 시스템 로케일 > LANG 환경변수)"""
    if settings.LOCALE:
        return settings.LOCALE
    system_locale = locale.getlocale()[0]
    return system_locale or os.environ.get("LANG") or None


def detect_language(locale_name: Optional[str]) -> Language:
    """로케일 문자열에 "ko" 가 포함되면 한국어, 아니면 영어 (로케일 미상 시 한국어)"""
    return Language.KO if "ko" in (locale_name or "ko") else Language.EN


def translate(language: Language, key: str) -> str:
    # 키 집합은 고정되어 있으므로 없는 키는 KeyError 그대로 전파
    return TRANSLATIONS[Language(language)][key]


def labels(language: Language) -> dict[str, str]:
    return dict(TRANSLATIONS[Language(language)])
