"""HTTP command layer: request routing and the single-message error surface."""

from __future__ import annotations

import pytest
import requests
from fastapi.testclient import TestClient

from codeops.core.config import Settings
from codeops.main import create_app
from codeops.routes.ide import get_service
from tests.helpers import FakeResponse, openai_reply


@pytest.fixture
def client(make_service):
    def _client(provider="openai", **overrides):
        app = create_app(Settings())
        service = make_service(provider, **overrides)
        app.dependency_overrides[get_service] = lambda: service
        return TestClient(app)

    return _client


def test_chat_route(client, fake_http) -> None:
    fake_http.replies.append(
        openai_reply('{"assistant_message": "Renamed.", "edits": [{"op": "rename", "from": "a", "to": "b"}]}')
    )
    resp = client().post("/v1/ai/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert resp.status_code == 200
    assert resp.json() == {
        "output_text": "Renamed.",
        "edits": [{"op": "rename", "from": "a", "to": "b"}],
    }


def test_action_route(client, fake_http) -> None:
    fake_http.replies.append(openai_reply('{"updated_content": "new", "summary": "ok"}'))
    resp = client().post(
        "/v1/ai/action",
        json={"action": "refactor", "path": "a.py", "content": "old"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"output_text": "ok", "updated_content": "new"}


def test_unknown_action_is_a_400_with_message(client) -> None:
    resp = client().post("/v1/ai/action", json={"action": "bogus", "content": "x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "unknown action: bogus"}


def test_offline_is_a_400(client) -> None:
    resp = client(offline_mode=True).post("/v1/ai/chat", json={"messages": []})
    assert resp.status_code == 400
    assert resp.json()["error"] == "offline mode is enabled"


def test_provider_failure_is_a_502(client, fake_http) -> None:
    fake_http.replies.append(FakeResponse(status_code=500, text="boom"))
    resp = client().post("/v1/ai/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert resp.status_code == 502
    assert "status 500" in resp.json()["error"]
    assert "boom" in resp.json()["error"]


def test_openrouter_models_route(client, fake_http) -> None:
    fake_http.replies.append(FakeResponse(text='{"data": [{"id": "x/y"}]}'))
    resp = client().get("/v1/ai/openrouter/models")
    assert resp.status_code == 200
    assert resp.json() == [{"id": "x/y"}]


def test_transport_failure_body_hides_gemini_key(client, fake_http) -> None:
    fake_http.replies.append(
        requests.ConnectionError("Max retries exceeded with url: /v1beta/x:generateContent?key=gm-test")
    )
    resp = client("gemini").post("/v1/ai/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert resp.status_code == 502
    assert "gm-test" not in resp.json()["error"]
