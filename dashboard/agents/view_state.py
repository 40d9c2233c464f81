"""뷰 상태 관리자 - 대시보드 상태의 유일한 소유자"""
import asyncio
import copy
from enum import Enum
from typing import Any, Callable, Optional
from loguru import logger
from dashboard.agents.fetch_orchestrator import FetchOrchestrator, PredictionError
from dashboard.config.settings import settings
from dashboard.schemas.recommendation import Market, Recommendation
from dashboard.schemas.prediction import Prediction
from dashboard.schemas.view import DashboardSnapshot, Language
from dashboard.services.localization import client_locale, detect_language, labels, translate
from dashboard.services.presenter import optional_panel, recommendation_row
from dashboard.tasks.polling import PollHandle, PollingScheduler

# (이벤트 종류, 메시지) - "state" | "alert" | "notice"
EventCallback = Callable[[str, Optional[str]], None]


class PredictOutcome(str, Enum):
    SKIPPED = "skipped"          # 빈 티커
    APPLIED = "applied"          # 예측 결과 반영
    FAILED = "failed"            # 요청 실패 (알림 표시)
    SUPERSEDED = "superseded"    # 더 최근 요청이 있어 응답 폐기


class DashboardController:
    """
    대시보드 상태(market, ticker, recommendations, prediction, language, 로딩 플래그)의
    단일 작성자. 화면은 의도 메서드만 호출하고 snapshot() 으로 읽는다.

    하위 구성요소:
    - FetchOrchestrator: 백엔드 호출 및 오류 매핑
    - PollingScheduler: 최적화 상태 주기 조회 (취소 핸들 기반)

    응답 순서 보장: 예측/추천 요청마다 순번을 매기고, 최신 요청보다 오래된 응답은 폐기
    """

    def __init__(
        self,
        orchestrator: Optional[FetchOrchestrator] = None,
        scheduler: Optional[PollingScheduler] = None,
        market: Optional[Market] = None,
        language: Optional[Language] = None,
        on_event: Optional[EventCallback] = None,
    ):
        self.orchestrator = orchestrator or FetchOrchestrator()
        self.scheduler = scheduler or PollingScheduler()
        self.on_event = on_event

        self._market = Market(market or settings.DEFAULT_MARKET)
        self._ticker = ""
        self._recommendations: list[Recommendation] = []
        self._prediction: Optional[Prediction] = None
        self._optimization_status: Optional[Any] = None
        self._language = Language(language) if language else detect_language(client_locale())
        self._loading_recs = False
        self._loading_predict = False

        self._poll: Optional[PollHandle] = None
        self._mounted = False
        self._recs_seq = 0
        self._predict_seq = 0

    # ─── 읽기 전용 접근 ───────────────────────────────────────────────

    @property
    def market(self) -> Market:
        return self._market

    @property
    def ticker(self) -> str:
        return self._ticker

    @property
    def recommendations(self) -> tuple[Recommendation, ...]:
        return tuple(self._recommendations)

    @property
    def prediction(self) -> Optional[Prediction]:
        return self._prediction

    @property
    def optimization_status(self) -> Optional[Any]:
        return copy.deepcopy(self._optimization_status)

    @property
    def language(self) -> Language:
        return self._language

    @property
    def loading_recs(self) -> bool:
        return self._loading_recs

    @property
    def loading_predict(self) -> bool:
        return self._loading_predict

    @property
    def polling(self) -> bool:
        return self._poll is not None and self._poll.active

    def snapshot(self) -> DashboardSnapshot:
        """현재 상태 + 표시용 파생값 (읽기 시점 계산)"""
        recommendations = list(self._recommendations)
        return DashboardSnapshot(
            market=self._market,
            ticker=self._ticker,
            language=self._language,
            loading_recs=self._loading_recs,
            loading_predict=self._loading_predict,
            recommendations=recommendations,
            rows=[recommendation_row(rec, self._market) for rec in recommendations],
            prediction=self._prediction,
            panel=optional_panel(self._prediction, self._ticker, self._language),
            optimization_status=copy.deepcopy(self._optimization_status),
            labels=labels(self._language),
        )

    # ─── 생명주기 ─────────────────────────────────────────────────────

    async def mount(self) -> None:
        """화면 시작: 현재 시장 기준 초기 조회 + 폴링 시작"""
        logger.info(f"대시보드 시작 (시장: {self._market.value}, 언어: {self._language.value})")
        self._mounted = True
        await self._start_market_cycle()

    async def close(self) -> None:
        """화면 종료: 폴링 취소 (이후 타이머 호출 없음)"""
        self._mounted = False
        self._cancel_polling()
        logger.info("대시보드 종료")

    async def _start_market_cycle(self) -> None:
        # 이전 타이머 해제 후 새 타이머 등록 (중복 타이머 방지)
        self._cancel_polling()
        self._poll = self.scheduler.start(self.refresh_optimization_status)
        await asyncio.gather(self.refresh_recommendations(), self.refresh_optimization_status())

    def _cancel_polling(self) -> None:
        if self._poll is not None:
            self._poll.cancel()
            self._poll = None

    # ─── 의도 메서드 ──────────────────────────────────────────────────

    async def set_market(self, market: Market) -> None:
        """시장 변경 → 추천 재조회 + 폴링 재시작 (ticker/prediction 은 유지)"""
        market = Market(market)
        if market == self._market:
            return
        logger.info(f"시장 변경: {self._market.value} → {market.value}")
        self._market = market
        self._emit("state")
        if self._mounted:
            await self._start_market_cycle()

    def set_ticker(self, raw: str) -> None:
        self._ticker = raw.upper()
        self._emit("state")

    async def select_recommendation(self, ticker: str) -> PredictOutcome:
        """추천 종목 클릭: ticker 변경과 예측 요청을 함께 수행"""
        if not ticker:
            return PredictOutcome.SKIPPED
        self._ticker = ticker
        return await self._run_predict(ticker)

    async def predict(self, ticker: Optional[str] = None) -> PredictOutcome:
        """입력 종목으로 예측 (ticker 전달 시 입력값을 먼저 갱신)"""
        if ticker is not None:
            self.set_ticker(ticker)
        return await self._run_predict(self._ticker)

    def toggle_language(self) -> Language:
        self._language = Language.EN if self._language == Language.KO else Language.KO
        self._emit("state")
        return self._language

    async def refresh_recommendations(self) -> None:
        self._recs_seq += 1
        seq = self._recs_seq
        market = self._market

        self._loading_recs = True
        self._emit("state")
        try:
            recommendations = await self.orchestrator.fetch_recommendations(market)
        finally:
            if seq == self._recs_seq:
                self._loading_recs = False

        if seq != self._recs_seq or market != self._market:
            logger.debug(f"{market.value} 추천 응답 폐기 (최신 요청 아님)")
        elif recommendations is not None:
            self._recommendations = list(recommendations)
        self._emit("state")

    async def refresh_optimization_status(self) -> None:
        status = await self.orchestrator.fetch_optimization_status()
        if status is None:
            return
        self._optimization_status = status
        self._emit("state")

    async def start_optimization(self) -> bool:
        """최적화 실행 요청 후 즉시 상태 재조회 (완료 여부가 아닌 접수 여부만 반영)"""
        accepted = await self.orchestrator.start_optimization()
        if not accepted:
            return False
        self._emit("notice", translate(self._language, "optimization_started"))
        await self.refresh_optimization_status()
        return True

    async def _run_predict(self, ticker: str) -> PredictOutcome:
        if not ticker:
            return PredictOutcome.SKIPPED

        self._predict_seq += 1
        seq = self._predict_seq

        # 이전 예측은 새 요청 전에 비움 (다른 종목 결과가 로딩 중에 보이지 않도록)
        self._loading_predict = True
        self._prediction = None
        self._emit("state")

        prediction: Optional[Prediction] = None
        try:
            prediction = await self.orchestrator.predict(ticker)
        except PredictionError:
            prediction = None
        finally:
            if seq == self._predict_seq:
                self._loading_predict = False

        if seq != self._predict_seq:
            logger.debug(f"{ticker} 예측 응답 폐기 (최신 요청 아님)")
            return PredictOutcome.SUPERSEDED

        if prediction is None:
            self._emit("alert", translate(self._language, "predict_error"))
            self._emit("state")
            return PredictOutcome.FAILED

        self._prediction = prediction
        self._emit("state")
        return PredictOutcome.APPLIED

    def _emit(self, kind: str, message: Optional[str] = None) -> None:
        if kind == "alert":
            logger.warning(f"사용자 알림: {message}")
        if self.on_event is not None:
            self.on_event(kind, message)
