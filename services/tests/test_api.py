"""Invoke API endpoints with a stubbed Bedrock runtime."""

import pytest
from fastapi.testclient import TestClient

from conftest import MODEL_ID, expected_call, reply
from invoke_api import main
from invoke_api.main import app, get_invoker
from invoker.health import HealthChecker
from invoker.invoker import InferenceInvoker


class FakeBedrock:
    async def check_model_visible(self) -> bool:
        return True


@pytest.fixture
def client(runtime_client):
    invoker = InferenceInvoker(runtime_client=runtime_client)
    app.dependency_overrides[get_invoker] = lambda: invoker
    app.state.health = HealthChecker(FakeBedrock())
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_predict_returns_completions(client, stubber):
    stubber.add_response(
        "invoke_model",
        reply({"outputs": [{"text": "one"}, {"text": "two"}]}),
        expected_call("Once upon a time"),
    )

    response = client.post(
        "/predict",
        json={"prompt": "Once upon a time"},
        headers={"X-Correlation-ID": "abc-123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["completions"] == ["one", "two"]
    assert data["model_id"] == MODEL_ID
    assert data["correlation_id"] == "abc-123"
    assert data["latency_ms"] >= 0


def test_predict_generates_correlation_id(client, stubber):
    stubber.add_response("invoke_model", reply({"outputs": []}), expected_call("hi"))

    response = client.post("/predict", json={"prompt": "hi"})

    assert response.status_code == 200
    assert response.json()["completions"] == []
    assert response.json()["correlation_id"]


def test_predict_maps_access_denied_to_403(client, stubber):
    stubber.add_client_error(
        "invoke_model", service_error_code="AccessDeniedException", http_status_code=403
    )

    response = client.post("/predict", json={"prompt": "hi"})

    assert response.status_code == 403
    detail = response.json()["detail"]
    assert detail["error"] == "access_denied"
    assert detail["model_id"] == MODEL_ID


def test_predict_maps_other_failures_to_500(client, stubber):
    stubber.add_client_error(
        "invoke_model", service_error_code="ThrottlingException", http_status_code=429
    )

    response = client.post("/predict", json={"prompt": "hi"})

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "prediction_failed"


def test_predict_rejects_empty_prompt(client):
    response = client.post("/predict", json={"prompt": ""})

    assert response.status_code == 422


def test_probes(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").status_code == 503
    assert client.get("/startup").json()["status"] == "started"
    assert client.get("/ready").json()["status"] == "ready"


def test_lifespan_gives_invoker_the_service_tracer(monkeypatch):
    monkeypatch.delenv("BEDROCK_MODEL_ID", raising=False)

    with TestClient(app):
        assert app.state.invoker.tracer is main.tracer
        assert app.state.invoker.config.model_id == MODEL_ID
