import asyncio
import json

import httpx
import pytest

from main import app
from models import LogRecord
from services.aggregation import aggregate
from services.summary import (
    OllamaClient,
    SummaryUnavailable,
    build_day_prompt,
    build_week_prompt,
    get_summary_client,
)
from services.week import build_window
from conftest import TODAY, make_log


def mock_client(handler) -> OllamaClient:
    return OllamaClient(base_url="http://ollama.test", model="test-model", transport=httpx.MockTransport(handler))


def test_day_prompt_contains_the_log():
    prompt = build_day_prompt(LogRecord.model_validate(make_log(nutrition=["Greens"], mood=None)))
    assert "2024-06-10" in prompt
    assert "Sunlight: 15 minutes" in prompt
    assert "Water: 2.5 liters" in prompt
    assert "Nutrition: Greens" in prompt
    assert "Mood: Not specified" in prompt
    assert "Tryptophan, Greens, Healthy Fats" in prompt


def test_week_prompt_without_data_is_motivational(store):
    window = build_window(store, TODAY)
    prompt = build_week_prompt(window, aggregate(window))
    assert "not logged any" in prompt
    assert "Average" not in prompt


def test_week_prompt_with_data(store):
    store.upsert(LogRecord.model_validate(make_log(date="2024-06-09")))
    window = build_window(store, TODAY)
    prompt = build_week_prompt(window, aggregate(window))
    assert "1 out of 7 days" in prompt
    assert "Average sleep: 7.5 hours/day" in prompt
    assert "Healthy Fats: Yes" in prompt
    assert "Sun Jun 09" in prompt


def test_generate_posts_to_ollama():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "  Lovely day!  "})

    text = asyncio.run(mock_client(handler).generate("hello"))
    assert text == "Lovely day!"
    assert seen["url"] == "http://ollama.test/api/generate"
    assert seen["body"] == {"model": "test-model", "prompt": "hello", "stream": False}


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(200, json={"response": "   "}),
    httpx.Response(200, text="not json"),
])
def test_generate_failures(response):
    with pytest.raises(SummaryUnavailable):
        asyncio.run(mock_client(lambda request: response).generate("hello"))


def test_generate_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SummaryUnavailable):
        asyncio.run(mock_client(handler).generate("hello"))


def test_day_summary_endpoint(client):
    client.post("/api/logs", json=make_log())
    app.dependency_overrides[get_summary_client] = lambda: mock_client(
        lambda request: httpx.Response(200, json={"response": "Well done."}))

    body = client.get("/api/summary/day/2024-06-10").json()
    assert body == {"date": "2024-06-10", "summary": "Well done.", "model": "test-model"}
    assert client.get("/api/summary/day/2024-06-01").status_code == 404


def test_week_summary_endpoint(client):
    client.post("/api/logs", json=make_log())
    app.dependency_overrides[get_summary_client] = lambda: mock_client(
        lambda request: httpx.Response(200, json={"response": "Great week."}))

    body = client.get("/api/summary/week").json()
    assert body["summary"] == "Great week."
    assert body["stats"]["days_logged"] == 1


def test_summary_unavailable_is_503(client):
    client.post("/api/logs", json=make_log())
    app.dependency_overrides[get_summary_client] = lambda: mock_client(
        lambda request: httpx.Response(502))

    assert client.get("/api/summary/week").status_code == 503
