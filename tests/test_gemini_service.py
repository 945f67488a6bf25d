import asyncio
import json

import httpx
import pytest

from app.core.errors import GeminiAPIError
from app.services.gemini_service import GeminiService


def make_service(handler):
    return GeminiService(
        api_key="test-gemini-key",
        model="gemini-2.5-flash",
        api_base="https://gemini.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )


def test_generate_text_request_and_parse():
    captured = {}
    
    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["key"] = request.headers.get("x-goog-api-key")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "candidates": [
                {"content": {"parts": [{"text": "Rayleigh "}, {"text": "scattering."}]}}
            ]
        })
    
    text = asyncio.run(make_service(handler).generate_text("Why is the sky blue?"))
    
    assert text == "Rayleigh scattering."
    assert captured["url"] == "https://gemini.test/v1beta/models/gemini-2.5-flash:generateContent"
    assert captured["key"] == "test-gemini-key"
    assert captured["body"] == {"contents": [{"parts": [{"text": "Why is the sky blue?"}]}]}


@pytest.mark.parametrize("payload", [
    {},
    {"candidates": []},
    {"candidates": [{"finishReason": "SAFETY"}]},
    {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
    {"candidates": [{"content": {"parts": [{"text": None}]}}]},
    {"candidates": [{"content": {"parts": "oops"}}]},
    {"candidates": ["oops"]},
    {"candidates": {"content": "oops"}},
])
def test_generate_text_without_usable_text(payload):
    service = make_service(lambda request: httpx.Response(200, json=payload))
    assert asyncio.run(service.generate_text("hi")) is None


def test_generate_text_http_error():
    service = make_service(lambda request: httpx.Response(429, text="quota exceeded"))
    
    with pytest.raises(GeminiAPIError) as exc_info:
        asyncio.run(service.generate_text("hi"))
    
    assert exc_info.value.status_code == 429
    assert exc_info.value.error_kind == "upstream_api"
    assert "quota exceeded" in str(exc_info.value)


def test_generate_text_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)
    
    with pytest.raises(GeminiAPIError) as exc_info:
        asyncio.run(make_service(handler).generate_text("hi"))
    
    assert exc_info.value.status_code is None


def test_generate_text_skips_null_parts():
    payload = {"candidates": [{"content": {"parts": [{"text": None}, {"text": "ok"}]}}]}
    service = make_service(lambda request: httpx.Response(200, json=payload))
    assert asyncio.run(service.generate_text("hi")) == "ok"


@pytest.mark.parametrize("payload", [[], ["candidates"], "text", 42])
def test_generate_text_non_object_json(payload):
    service = make_service(lambda request: httpx.Response(200, json=payload))
    
    with pytest.raises(GeminiAPIError) as exc_info:
        asyncio.run(service.generate_text("hi"))
    
    assert exc_info.value.status_code == 200


def test_generate_text_non_json_body():
    service = make_service(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    
    with pytest.raises(GeminiAPIError):
        asyncio.run(service.generate_text("hi"))
