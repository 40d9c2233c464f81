import asyncio

import pytest

from dashboard.agents.fetch_orchestrator import FetchOrchestrator, PredictionError
from dashboard.schemas.recommendation import Market, Recommendation
from dashboard.schemas.prediction import Prediction
from dashboard.services.backend_client import BackendError


class _DummyClient:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple] = []

    def _check(self, name: str, *args):
        self.calls.append((name, *args))
        if self.fail:
            raise BackendError(f"{name} failed")

    async def get_recommendations(self, market):
        self._check("recommendations", market)
        return [Recommendation.model_validate({"ticker": "AAPL", "analysis": {"signal": "Buy"}})]

    async def get_optimization_status(self):
        self._check("status")
        return {"generation": 3}

    async def predict(self, ticker):
        self._check("predict", ticker)
        return Prediction(outlook="Bullish", current_price=1.0, predicted_price_7d=2.0)

    async def run_optimization(self):
        self._check("run")


def test_fetch_recommendations_success() -> None:
    client = _DummyClient()
    recommendations = asyncio.run(FetchOrchestrator(client).fetch_recommendations(Market.US))

    assert [rec.ticker for rec in recommendations] == ["AAPL"]
    assert client.calls == [("recommendations", Market.US)]


def test_background_fetch_failures_are_silent() -> None:
    orchestrator = FetchOrchestrator(_DummyClient(fail=True))

    assert asyncio.run(orchestrator.fetch_recommendations(Market.KR)) is None
    assert asyncio.run(orchestrator.fetch_optimization_status()) is None


def test_predict_failure_raises_prediction_error() -> None:
    orchestrator = FetchOrchestrator(_DummyClient(fail=True))

    with pytest.raises(PredictionError) as exc_info:
        asyncio.run(orchestrator.predict("AAPL"))

    assert exc_info.value.ticker == "AAPL"
    assert isinstance(exc_info.value.__cause__, BackendError)


def test_predict_success_returns_prediction() -> None:
    prediction = asyncio.run(FetchOrchestrator(_DummyClient()).predict("AAPL"))

    assert prediction.outlook == "Bullish"


def test_start_optimization_reports_acceptance() -> None:
    assert asyncio.run(FetchOrchestrator(_DummyClient()).start_optimization()) is True
    assert asyncio.run(FetchOrchestrator(_DummyClient(fail=True)).start_optimization()) is False
