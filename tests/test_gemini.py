import httpx
import pytest

from conftest import gemini_body
from texttune.core.errors import UpstreamEmptyResponseError, UpstreamHttpError, UpstreamTransportError
from texttune.services.gemini import extract_text


@pytest.mark.asyncio
async def test_generate_sends_one_request_and_trims(gemini_client, fake_gemini):
    text = await gemini_client.generate("Say hi", temperature=0.7, max_output_tokens=1000)

    assert text == "Polished text."
    assert len(fake_gemini.requests) == 1
    request = fake_gemini.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert request.url.params["key"] == "test-key"
    assert fake_gemini.last_payload == {
        "contents": [{"role": "user", "parts": [{"text": "Say hi"}]}],
        "generationConfig": {"temperature": 0.7, "maxOutputTokens": 1000},
    }


@pytest.mark.asyncio
async def test_http_error_carries_upstream_message(gemini_client, fake_gemini):
    fake_gemini.reply(400, {"error": {"code": 400, "message": "API key not valid."}})

    with pytest.raises(UpstreamHttpError) as exc:
        await gemini_client.generate("x", temperature=0.9, max_output_tokens=500)

    assert exc.value.status_code == 400
    assert exc.value.message == "API key not valid."
    assert len(fake_gemini.requests) == 1


@pytest.mark.asyncio
async def test_http_error_without_message_uses_status(gemini_client, fake_gemini):
    fake_gemini.reply(503, "upstream unavailable")

    with pytest.raises(UpstreamHttpError) as exc:
        await gemini_client.generate("x", temperature=0.9, max_output_tokens=500)

    assert exc.value.message == "Error from AI service (HTTP 503)"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": [{"finishReason": "SAFETY"}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
    ],
)
async def test_missing_content_is_empty_response_error(gemini_client, fake_gemini, body):
    fake_gemini.reply(200, body)

    with pytest.raises(UpstreamEmptyResponseError) as exc:
        await gemini_client.generate("x", temperature=0.7, max_output_tokens=1000)

    assert exc.value.message == "No content found in AI response."


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(gemini_client, fake_gemini):
    fake_gemini.fail_with(httpx.ConnectError("connection refused"))

    with pytest.raises(UpstreamTransportError):
        await gemini_client.generate("x", temperature=0.7, max_output_tokens=1000)


def test_extract_text_uses_first_candidate():
    body = gemini_body(" first ")
    body["candidates"].append({"content": {"parts": [{"text": "second"}]}})

    assert extract_text(body) == "first"
