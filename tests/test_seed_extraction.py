import json
from types import SimpleNamespace

import httpx
import pytest

from app.core.config import settings
from app.services import seed_extraction
from app.services.seed_extraction import (
    ExtractionNotConfiguredError,
    SeedExtractionError,
    apply_default_timing,
    build_request,
    extract_seed_data,
    parse_tool_output,
)


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl


def _tool_response(data: dict) -> dict:
    return {
        "content": [
            {"type": "text", "text": "Here you go"},
            {"type": "tool_use", "name": "extract_seed_info", "input": data},
        ]
    }


def test_build_request_forces_tool_use():
    payload = build_request("Page text", "https://example.com/seed")
    assert payload["tool_choice"] == {"type": "tool", "name": "extract_seed_info"}
    assert payload["tools"][0]["name"] == "extract_seed_info"
    content = payload["messages"][0]["content"]
    assert "<webpage_content>\nPage text\n</webpage_content>" in content
    assert "https://example.com/seed" in content


def test_parse_tool_output():
    assert parse_tool_output(_tool_response({"is_seed_product_page": True})) == {"is_seed_product_page": True}


def test_parse_tool_output_without_tool_block():
    with pytest.raises(SeedExtractionError):
        parse_tool_output({"content": [{"type": "text", "text": "no"}]})


def test_apply_default_timing_fills_missing_fields():
    data = apply_default_timing({"common_name": "Tomato", "planting_method": None})
    assert data["planting_method"] == "start_indoors"
    assert data["weeks_before_last_frost"] == 6
    assert data["cold_hardy"] is False


def test_apply_default_timing_keeps_page_values():
    data = apply_default_timing({
        "common_name": "Tomato",
        "planting_method": "start_indoors",
        "weeks_before_last_frost": 8,
    })
    assert data["weeks_before_last_frost"] == 8


def test_apply_default_timing_skips_different_method():
    # Page says direct sow; tomato defaults are for starting indoors
    original = {"common_name": "Tomato", "planting_method": "direct_sow"}
    assert apply_default_timing(original) == original


def test_apply_default_timing_unknown_plant():
    original = {"common_name": "Mystery Vine"}
    assert apply_default_timing(original) == original


async def test_extract_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "")
    with pytest.raises(ExtractionNotConfiguredError):
        await extract_seed_data("content", "https://example.com/seed")


async def test_extract_calls_model_and_caches(monkeypatch):
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "test-key")
    calls = []

    async def fake_post(payload):
        calls.append(payload)
        return _tool_response({"is_seed_product_page": True, "common_name": "Zinnia"})

    monkeypatch.setattr(seed_extraction, "_post_with_retry", fake_post)
    redis = FakeRedis()

    first = await extract_seed_data("content", "https://example.com/zinnia", redis)
    second = await extract_seed_data("content", "https://example.com/zinnia", redis)

    assert len(calls) == 1
    assert first == second
    assert first["planting_method"] == "direct_sow"
    assert first["weeks_after_last_frost"] == 1
    # Raw tool output is cached, defaults are applied on read
    cached = json.loads(redis.store["seed_extraction:https://example.com/zinnia"])
    assert "planting_method" not in cached
    assert redis.ttls["seed_extraction:https://example.com/zinnia"] == settings.EXTRACTION_CACHE_TTL_SECONDS


# ── Model API transport ───────────────────────────────────────────────────────


def _mock_model_api(monkeypatch, handler) -> list[int]:
    """Route the model client through ``handler`` and record retry waits instead of sleeping."""
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "test-key")
    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        return real_client(*args, transport=httpx.MockTransport(handler), **kwargs)

    waits: list[int] = []

    async def no_sleep(seconds):
        waits.append(seconds)

    monkeypatch.setattr(seed_extraction.httpx, "AsyncClient", client_factory)
    monkeypatch.setattr(seed_extraction, "asyncio", SimpleNamespace(sleep=no_sleep))
    return waits


async def test_connection_error_becomes_extraction_error(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _mock_model_api(monkeypatch, handler)
    with pytest.raises(SeedExtractionError, match="connection refused"):
        await extract_seed_data("content", "https://example.com/seed")


async def test_invalid_json_becomes_extraction_error(monkeypatch):
    _mock_model_api(monkeypatch, lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(SeedExtractionError, match="invalid JSON"):
        await extract_seed_data("content", "https://example.com/seed")


async def test_server_errors_retry_then_give_up_without_final_wait(monkeypatch):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="overloaded")

    waits = _mock_model_api(monkeypatch, handler)
    with pytest.raises(SeedExtractionError, match="Retries exhausted"):
        await extract_seed_data("content", "https://example.com/seed")
    assert len(calls) == 3
    assert waits == [2, 4]


async def test_rate_limit_then_success(monkeypatch):
    responses = iter([
        httpx.Response(429, text="slow down"),
        httpx.Response(200, json=_tool_response({"is_seed_product_page": True, "variety_name": "Genovese"})),
    ])
    waits = _mock_model_api(monkeypatch, lambda request: next(responses))

    data = await extract_seed_data("content", "https://example.com/basil")
    assert data["variety_name"] == "Genovese"
    assert waits == [2]


async def test_client_error_is_not_retried(monkeypatch):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, text="bad key")

    _mock_model_api(monkeypatch, handler)
    with pytest.raises(SeedExtractionError, match="HTTP 401"):
        await extract_seed_data("content", "https://example.com/seed")
    assert len(calls) == 1
