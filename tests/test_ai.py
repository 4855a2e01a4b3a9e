import json

import pytest
import requests

from utils import ai_service
from utils.ai_service import build_roadmap_prompt, extract_json_block


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture()
def captured(monkeypatch):
    calls = []

    def install(response):
        def fake_post(url, json=None, headers=None, timeout=None):
            calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(ai_service.requests, "post", fake_post)
        return calls

    return install


def _completion(content, model="google/gemma-2-9b-it:free"):
    return FakeResponse(200, {"model": model, "choices": [{"message": {"content": content}}]})


def test_chat_proxies_message_and_returns_reply(client, captured):
    calls = captured(_completion("Hello there", model="deepseek/deepseek-r1-0528:free"))

    response = client.post("/api/ai/chat", json={"message": "Hi", "model": "deepseek/deepseek-r1-0528:free"})

    assert response.status_code == 200
    assert response.get_json()["data"] == {"reply": "Hello there", "model": "deepseek/deepseek-r1-0528:free"}
    assert calls[0]["json"] == {
        "model": "deepseek/deepseek-r1-0528:free",
        "messages": [{"role": "user", "content": "Hi"}],
    }
    assert calls[0]["headers"]["Authorization"] == "Bearer test-openrouter-key"
    assert calls[0]["headers"]["X-Title"] == "Techroot"


def test_chat_uses_default_model(client, captured, app):
    calls = captured(_completion("ok"))

    client.post("/api/ai/chat", json={"message": "Hi"})

    assert calls[0]["json"]["model"] == app.config["OPENROUTER_DEFAULT_MODEL"]


def test_chat_requires_message(client, captured):
    calls = captured(_completion("unused"))

    response = client.post("/api/ai/chat", json={"message": "   "})

    assert response.status_code == 400
    assert calls == []


def test_chat_without_api_key_is_server_error(client, app, captured):
    captured(_completion("unused"))
    app.config["OPENROUTER_API_KEY"] = ""

    response = client.post("/api/ai/chat", json={"message": "Hi"})

    assert response.status_code == 500
    assert response.get_json()["success"] is False


def test_chat_relays_provider_error_status(client, captured):
    captured(FakeResponse(429, {"error": {"message": "Rate limit exceeded"}}))

    response = client.post("/api/ai/chat", json={"message": "Hi"})

    assert response.status_code == 429
    assert response.get_json()["error"] == "Rate limit exceeded"


def test_chat_network_failure_is_server_error(client, captured):
    captured(requests.ConnectionError("connection refused"))

    response = client.post("/api/ai/chat", json={"message": "Hi"})

    assert response.status_code == 500
    assert "connection refused" in response.get_json()["error"]


def test_roadmap_builds_prompt_and_extracts_json(client, captured):
    plan = {"title": "Frontend in 3 months", "phases": [{"name": "HTML", "duration": "2 weeks", "topics": ["tags"], "project": "Bio page"}]}
    reply = "# Roadmap\n\nSome markdown.\n\n```json\n" + json.dumps(plan) + "\n```\n"
    calls = captured(_completion(reply))

    response = client.post("/api/ai/roadmap", json={
        "purpose": "career-switch",
        "field": "Frontend Development",
        "level": "beginner",
        "daily_time": "2-4",
        "duration": "3-months",
        "goal": "first-job",
    })

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["roadmap"] == plan
    assert data["reply"] == reply
    prompt = calls[0]["json"]["messages"][0]["content"]
    assert "Purpose: Switch careers" in prompt
    assert "Study time: 2-4 hours/day" in prompt


def test_roadmap_requires_profile_fields(client, captured):
    calls = captured(_completion("unused"))

    response = client.post("/api/ai/roadmap", json={"purpose": "freelance"})

    assert response.status_code == 400
    assert "field" in response.get_json()["error"]
    assert calls == []


def test_models_endpoint_lists_suggestions(client):
    data = client.get("/api/ai/models").get_json()["data"]

    assert any(model["id"] == "google/gemma-3-27b-it:free" for model in data["models"])
    assert data["default"]


def test_build_roadmap_prompt_passes_unknown_values_through():
    prompt = build_roadmap_prompt({
        "purpose": "hobby",
        "field": "Game Development",
        "level": "advanced",
        "daily_time": "30 minutes",
        "duration": "6-months",
        "goal": "portfolio",
        "additional_info": "I know some C#",
    })

    assert "Purpose: hobby" in prompt
    assert "Current level: Advanced" in prompt
    assert "Target duration: 6 months" in prompt
    assert "Additional info: I know some C#" in prompt


def test_extract_json_block_prefers_fenced_block():
    text = 'Note {not json}\n```json\n{"a": 1}\n```'
    assert extract_json_block(text) == {"a": 1}


def test_extract_json_block_falls_back_to_bare_object():
    assert extract_json_block('Here you go: {"steps": [1, 2]} enjoy') == {"steps": [1, 2]}


def test_extract_json_block_returns_none_without_json():
    assert extract_json_block("Just markdown, no data") is None
    assert extract_json_block(None) is None
