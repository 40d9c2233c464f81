"""추천/예측 백엔드 HTTP 클라이언트"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional
import requests
from loguru import logger
from pydantic import ValidationError
from dashboard.config.settings import settings
from dashboard.schemas.recommendation import Market, Recommendation, RecommendationResponse
from dashboard.schemas.prediction import PredictRequest, PredictResponse, Prediction

_executor = ThreadPoolExecutor(max_workers=settings.HTTP_MAX_WORKERS)


class BackendError(Exception):
    """전송 실패, 2xx 외 응답, 응답 파싱 실패"""


def resolve_base_url(api_url: str, origin: str) -> str:
    """절대 URL은 그대로, 상대 경로(/api)는 오리진에 붙여서 사용"""
    if api_url.startswith(("http://", "https://")):
        return api_url.rstrip("/")
    return f"{origin.rstrip('/')}/{api_url.strip('/')}".rstrip("/")


class BackendClient:
    """
    백엔드 4개 엔드포인트 호출
    - GET  /recommendations?market=KR|US
    - GET  /optimization/status
    - POST /optimization/run
    - POST /predict {ticker}
    requests 동기 호출은 스레드풀에서 실행 (이벤트 루프 비차단)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or resolve_base_url(settings.API_URL, settings.API_ORIGIN)
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    def _request_sync(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        payload: Optional[dict] = None,
        parse: bool = True,
    ) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.request(method, url, params=params, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json() if parse else None
        except (requests.RequestException, ValueError) as e:
            raise BackendError(f"{method} {url} 실패: {e}") from e

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(_executor, lambda: self._request_sync(method, path, **kwargs))

    async def get_recommendations(self, market: Market) -> list[Recommendation]:
        data = await self._request("GET", "recommendations", params={"market": Market(market).value})
        try:
            parsed = RecommendationResponse.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"추천 응답 파싱 실패: {e}") from e
        return parsed.recommendations or []

    async def get_optimization_status(self) -> Any:
        return await self._request("GET", "optimization/status")

    async def run_optimization(self) -> None:
        await self._request("POST", "optimization/run", parse=False)

    async def predict(self, ticker: str) -> Prediction:
        payload = PredictRequest(ticker=ticker).model_dump()
        data = await self._request("POST", "predict", payload=payload)
        try:
            prediction = PredictResponse.model_validate(data).merged()
        except ValidationError as e:
            raise BackendError(f"{ticker} 예측 응답 파싱 실패: {e}") from e
        logger.debug(f"{ticker} 예측 응답 수신: outlook={prediction.outlook}")
        return prediction
