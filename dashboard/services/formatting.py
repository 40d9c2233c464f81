"""표시용 값 계산 서비스 (통화 기호, 가격, 수익률, 추세 색상)

모든 함수는 부수효과 없는 순수 함수.
"""
import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from email.utils import parsedate_to_datetime
from typing import Optional, Union
from dashboard.schemas.recommendation import Market

KRW_SUFFIXES = (".KS", ".KQ")
KRW_SYMBOL = "₩"
USD_SYMBOL = "$"
NOT_AVAILABLE = "N/A"

UP_COLOR = "#238636"
DOWN_COLOR = "#da3633"
BULLISH = "Bullish"

Number = Union[int, float]


def is_krw_ticker(ticker: str) -> bool:
    """.KS(코스피) / .KQ(코스닥) 접미사 종목은 원화 표시"""
    return ticker.endswith(KRW_SUFFIXES)


def currency_symbol(ticker: str, market: Optional[Market] = None) -> str:
    """
    통화 기호 결정
    - 예측 패널: market 없이 호출 → 티커 접미사만 사용
    - 추천 목록: market 전달 → KR 시장이면 접미사 없어도 원화
    두 규칙은 의도적으로 다르게 유지 (추천은 시장 단위, 직접 입력 티커는 시장 무관)
    """
    if is_krw_ticker(ticker) or (market is not None and market == Market.KR):
        return KRW_SYMBOL
    return USD_SYMBOL


def group_number(value: Number, max_digits: int) -> str:
    """천 단위 구분 + 소수점 이하 최대 max_digits 자리 (반올림, 뒤쪽 0 제거)

    inf/nan 은 N/A. 28자리를 넘는 큰 값도 정밀도를 늘려 그대로 표시
    """
    if not math.isfinite(value):
        return NOT_AVAILABLE
    exact = Decimal(str(value))
    quantum = Decimal(1).scaleb(-max_digits)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + max_digits + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{rounded:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def plain_number(value: Optional[Number]) -> str:
    if value is None:
        return NOT_AVAILABLE
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def rounded_price(value: Optional[Number], is_krw: bool) -> str:
    # 값이 없거나 0 이면 N/A
    if not value:
        return NOT_AVAILABLE
    return group_number(value, 0 if is_krw else 2)


def potential(current: Optional[Number], target: Optional[Number]) -> str:
    """예상 수익률 = (목표가 - 현재가) / 현재가 * 100, 부호 유지"""
    if not current or not target:
        return NOT_AVAILABLE
    change = (target - current) / current * 100
    if not math.isfinite(change):
        return NOT_AVAILABLE
    return f"{change:.2f}%"


def trend_color(target: Optional[Number], current: Optional[Number]) -> str:
    if target is None or current is None:
        return DOWN_COLOR
    return UP_COLOR if target > current else DOWN_COLOR


def outlook_color(outlook: Optional[str]) -> str:
    return UP_COLOR if outlook == BULLISH else DOWN_COLOR


def score_label(total_score: Optional[Number], analysis_score: Optional[Number]) -> str:
    """종합 점수가 있으면 소수 1자리, 없으면 분석 점수 그대로"""
    if total_score:
        return f"{total_score:.1f}"
    return plain_number(analysis_score)


def pe_label(pe: Optional[Number]) -> str:
    return f"{pe:.1f}" if pe else NOT_AVAILABLE


def margin_label(profit_margin: Optional[Number]) -> str:
    return f"{profit_margin * 100:.1f}%" if profit_margin else NOT_AVAILABLE


def sentiment_tag(sentiment: str) -> str:
    if sentiment == "Positive":
        return "buy"
    if sentiment == "Negative":
        return "sell"
    return ""


def sentiment_score_label(score: Number) -> str:
    """0 이면 빈 문자열, 양수면 + 부호 표시"""
    if score == 0:
        return ""
    sign = "+" if score > 0 else ""
    return f"({sign}{plain_number(score)})"


def published_label(published: Optional[str]) -> Optional[str]:
    """ISO 8601 또는 RFC 2822 날짜 → YYYY-MM-DD (해석 불가 시 원문 유지)"""
    if not published:
        return None
    try:
        return datetime.fromisoformat(published.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(published).strftime("%Y-%m-%d")
    except (TypeError, ValueError):
        return published
