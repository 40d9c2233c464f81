from __future__ import annotations

import asyncio
import json

from fastapi.testclient import TestClient

from dashboard.agents.fetch_orchestrator import PredictionError
from dashboard.agents.view_state import DashboardController
from dashboard.api.v1.sse import event_stream
from dashboard.schemas.recommendation import Market, Recommendation
from dashboard.schemas.prediction import Prediction
from dashboard.schemas.view import Language
from dashboard.services.events import MAX_QUEUED_EVENTS, EventHub, dashboard_event
from dashboard.tasks.polling import PollingScheduler
from main import create_app


class _DummyOrchestrator:
    def __init__(self):
        self.fail_predict = False
        self.rec_calls: list[Market] = []
        self.predict_calls: list[str] = []
        self.run_calls = 0

    async def fetch_recommendations(self, market):
        self.rec_calls.append(market)
        ticker = "005930.KS" if market == Market.KR else "AAPL"
        return [
            Recommendation.model_validate(
                {"ticker": ticker, "name": ticker, "analysis": {"signal": "Buy", "score": 3, "current_price": 150.0}}
            )
        ]

    async def fetch_optimization_status(self):
        return {"running": self.run_calls > 0}

    async def predict(self, ticker):
        self.predict_calls.append(ticker)
        if self.fail_predict:
            raise PredictionError(ticker)
        return Prediction(outlook="Bullish", current_price=100.0, predicted_price_7d=90.0, reasoning="mean reversion")

    async def start_optimization(self):
        self.run_calls += 1
        return True


def _build(language: Language = Language.EN) -> tuple[TestClient, _DummyOrchestrator]:
    orchestrator = _DummyOrchestrator()
    controller = DashboardController(
        orchestrator=orchestrator,
        scheduler=PollingScheduler(interval=3600),
        language=language,
    )
    return TestClient(create_app(controller)), orchestrator


def test_state_exposes_snapshot_and_labels() -> None:
    client, _ = _build()
    with client:
        response = client.get("/api/v1/state")

    assert response.status_code == 200
    body = response.json()
    assert body["market"] == "KR"
    assert body["language"] == "en"
    assert body["labels"]["predict_btn"] == "Predict"


def test_market_intent_refetches_for_new_market() -> None:
    client, orchestrator = _build()
    with client:
        response = client.post("/api/v1/market", json={"market": "US"})

    assert response.status_code == 200
    body = response.json()
    assert body["market"] == "US"
    assert [row["ticker"] for row in body["rows"]] == ["AAPL"]
    assert body["rows"][0]["price_label"] == "$150"
    assert Market.US in orchestrator.rec_calls


def test_unknown_market_is_rejected() -> None:
    client, _ = _build()
    with client:
        response = client.post("/api/v1/market", json={"market": "JP"})

    assert response.status_code == 422


def test_ticker_and_predict_flow() -> None:
    client, orchestrator = _build()
    with client:
        client.post("/api/v1/ticker", json={"ticker": "aapl"})
        response = client.post("/api/v1/predict", json={})

    assert response.status_code == 200
    panel = response.json()["panel"]
    assert panel["ticker"] == "AAPL"
    assert panel["potential"] == "-10.00%"
    assert panel["target_price_label"] == "$90"
    assert orchestrator.predict_calls == ["AAPL"]


def test_predict_with_empty_ticker_is_ignored() -> None:
    client, orchestrator = _build()
    with client:
        response = client.post("/api/v1/predict", json={})

    assert response.status_code == 200
    assert response.json()["prediction"] is None
    assert orchestrator.predict_calls == []


def test_failed_predict_returns_alert() -> None:
    client, orchestrator = _build(Language.KO)
    orchestrator.fail_predict = True
    with client:
        response = client.post("/api/v1/predict", json={"ticker": "msft"})
        state = client.get("/api/v1/state").json()

    assert response.status_code == 502
    assert response.json()["detail"] == "예측 데이터를 가져오지 못했습니다."
    assert state["prediction"] is None
    assert state["loading_predict"] is False


def test_select_recommendation_predicts_for_ticker() -> None:
    client, orchestrator = _build()
    with client:
        response = client.post("/api/v1/recommendations/005930.KS/select")

    assert response.status_code == 200
    body = response.json()
    assert body["ticker"] == "005930.KS"
    assert body["panel"]["current_price_label"] == "₩100"
    assert orchestrator.predict_calls == ["005930.KS"]


def test_language_toggle_and_optimization_run() -> None:
    client, orchestrator = _build()
    with client:
        toggled = client.post("/api/v1/language/toggle").json()
        run = client.post("/api/v1/optimization/run").json()

    assert toggled["language"] == "ko"
    assert run["success"] is True
    assert run["state"]["optimization_status"] == {"running": True}
    assert orchestrator.run_calls == 1


def test_health_reports_polling_while_running() -> None:
    client, _ = _build()
    with client:
        client.post("/api/v1/recommendations/refresh")
        health = client.get("/health").json()

    assert health["status"] == "ok"
    assert health["mounted"] is True


def test_event_stream_sends_state_then_published_events() -> None:
    controller = DashboardController(
        orchestrator=_DummyOrchestrator(),
        scheduler=PollingScheduler(interval=3600),
        language=Language.EN,
    )
    hub = EventHub()
    controller.on_event = lambda kind, message: hub.publish(dashboard_event(controller, kind, message))

    async def _runner():
        stream = event_stream(hub, controller, heartbeat=0.05)
        first = await stream.__anext__()
        controller.set_ticker("tsla")
        second = await stream.__anext__()
        heartbeat = await stream.__anext__()
        await stream.aclose()
        return first, second, heartbeat

    first, second, heartbeat = asyncio.run(_runner())

    def _payload(chunk: str) -> dict:
        assert chunk.startswith("data: ") and chunk.endswith("\n\n")
        return json.loads(chunk[len("data: "):])

    assert _payload(first)["data"]["ticker"] == ""
    assert _payload(second)["data"]["ticker"] == "TSLA"
    assert _payload(heartbeat) == {"type": "heartbeat", "count": 0}
    assert hub.subscriber_count == 0


def test_event_hub_fans_out_to_all_subscribers() -> None:
    async def _runner():
        hub = EventHub()
        first, second = hub.subscribe(), hub.subscribe()
        hub.publish({"type": "alert", "message": "Error fetching prediction"})
        return first.get_nowait(), second.get_nowait()

    assert asyncio.run(_runner()) == (
        {"type": "alert", "message": "Error fetching prediction"},
        {"type": "alert", "message": "Error fetching prediction"},
    )


def test_full_queue_drops_stale_state_before_alerts() -> None:
    async def _runner():
        hub = EventHub()
        queue = hub.subscribe()
        hub.publish({"type": "alert", "message": "first"})
        for seq in range(MAX_QUEUED_EVENTS - 1):
            hub.publish({"type": "state", "data": {"seq": seq}})
        hub.publish({"type": "alert", "message": "Error fetching prediction"})
        drained = []
        while not queue.empty():
            drained.append(queue.get_nowait())
        return drained

    drained = asyncio.run(_runner())

    assert drained == [
        {"type": "alert", "message": "first"},
        {"type": "state", "data": {"seq": MAX_QUEUED_EVENTS - 2}},
        {"type": "alert", "message": "Error fetching prediction"},
    ]


def test_full_queue_of_alerts_drops_the_oldest() -> None:
    async def _runner():
        hub = EventHub()
        queue = hub.subscribe()
        for seq in range(MAX_QUEUED_EVENTS + 1):
            hub.publish({"type": "alert", "message": str(seq)})
        return queue.qsize(), queue.get_nowait()

    assert asyncio.run(_runner()) == (MAX_QUEUED_EVENTS, {"type": "alert", "message": "1"})
