"""페치 오케스트레이터 - 화면 의도 1건을 백엔드 호출 1건으로 변환"""
from typing import Any, Optional
from loguru import logger
from dashboard.schemas.recommendation import Market, Recommendation
from dashboard.schemas.prediction import Prediction
from dashboard.services.backend_client import BackendClient, BackendError


class PredictionError(Exception):
    """사용자가 직접 요청한 예측이 실패 (화면에 알림 표시 대상)"""

    def __init__(self, ticker: str):
        super().__init__(f"{ticker} 예측 실패")
        self.ticker = ticker


class FetchOrchestrator:
    """
    백엔드 호출 결과를 뷰 상태에 반영할 값으로 변환

    오류 정책:
    - 추천/최적화 상태 (백그라운드 조회): 로그만 남기고 None 반환 → 마지막 정상값 유지
    - 예측 (사용자 명시 요청): PredictionError 로 전파 → 알림 표시
    - 재시도 없음
    """

    def __init__(self, client: Optional[BackendClient] = None):
        self.client = client or BackendClient()

    async def fetch_recommendations(self, market: Market) -> Optional[list[Recommendation]]:
        try:
            recommendations = await self.client.get_recommendations(market)
        except BackendError as e:
            logger.error(f"{market.value} 추천 종목 조회 실패: {e}")
            return None
        logger.info(f"{market.value} 추천 종목 {len(recommendations)}개 수신")
        return recommendations

    async def fetch_optimization_status(self) -> Optional[Any]:
        try:
            return await self.client.get_optimization_status()
        except BackendError as e:
            logger.error(f"최적화 상태 조회 실패: {e}")
            return None

    async def predict(self, ticker: str) -> Prediction:
        try:
            prediction = await self.client.predict(ticker)
        except BackendError as e:
            logger.error(f"{ticker} 예측 요청 실패: {e}")
            raise PredictionError(ticker) from e
        logger.info(f"{ticker} 예측 완료: {prediction.outlook}")
        return prediction

    async def start_optimization(self) -> bool:
        """최적화 실행 요청 (결과는 기다리지 않음, 접수 여부만 반환)"""
        try:
            await self.client.run_optimization()
        except BackendError as e:
            logger.error(f"최적화 실행 요청 실패: {e}")
            return False
        logger.info("최적화(Evolution) 실행 요청 접수")
        return True
