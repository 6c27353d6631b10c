import json

import httpx
import pytest

from docucare.summarization.exceptions import (
    EmptyOutputError,
    InvalidResponseError,
    MissingCredentialError,
    SummarizationNetworkError,
)
from docucare.summarization.gemini_client_adapter import GeminiClientAdapter
from docucare.summarization.models import EncodedImage


def _ok(text: str) -> dict[str, object]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class _Recorder:
    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _adapter(handler: _Recorder, api_key: str = "secret-key") -> GeminiClientAdapter:
    return GeminiClientAdapter(
        api_key=api_key,
        model="gemini-2.0-flash",
        base_url="https://gemini.example.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )


def _generate(adapter: GeminiClientAdapter, images: list[EncodedImage] | None = None) -> str:
    return adapter.generate(
        system_instruction="Summarize kindly.",
        text="Hemoglobin 13.2 g/dL",
        images=images or [],
        temperature=0.2,
        max_output_tokens=500,
    )


class TestRequest:
    def test_posts_to_generate_content_with_key_header(self) -> None:
        handler = _Recorder(httpx.Response(200, json=_ok("Title\n\nBody")))

        _generate(_adapter(handler))

        (request,) = handler.requests
        assert request.method == "POST"
        assert str(request.url) == (
            "https://gemini.example.test/v1beta/models/gemini-2.0-flash:generateContent"
        )
        assert request.headers["x-goog-api-key"] == "secret-key"

    def test_body_carries_instruction_text_images_and_config(self) -> None:
        handler = _Recorder(httpx.Response(200, json=_ok("ok")))
        images = [
            EncodedImage(mime_type="image/jpeg", data="AAA"),
            EncodedImage(mime_type="image/jpeg", data="BBB"),
        ]

        _generate(_adapter(handler), images=images)

        body = json.loads(handler.requests[0].content)
        assert body["systemInstruction"] == {
            "role": "system",
            "parts": [{"text": "Summarize kindly."}],
        }
        parts = body["contents"][0]["parts"]
        assert body["contents"][0]["role"] == "user"
        assert parts[0] == {"text": "Hemoglobin 13.2 g/dL"}
        assert parts[1:] == [
            {"inlineData": {"mimeType": "image/jpeg", "data": "AAA"}},
            {"inlineData": {"mimeType": "image/jpeg", "data": "BBB"}},
        ]
        assert body["generationConfig"] == {"temperature": 0.2, "maxOutputTokens": 500}

    def test_missing_api_key_fails_before_request(self) -> None:
        handler = _Recorder(httpx.Response(200, json=_ok("ok")))
        with pytest.raises(MissingCredentialError):
            _generate(_adapter(handler, api_key=""))
        assert handler.requests == []


class TestResponse:
    def test_returns_trimmed_text(self) -> None:
        handler = _Recorder(httpx.Response(200, json=_ok("  Blood Panel\n\nAll fine.\n")))
        assert _generate(_adapter(handler)) == "Blood Panel\n\nAll fine."

    def test_joins_multiple_text_parts(self) -> None:
        payload = {
            "candidates": [
                {"content": {"parts": [{"text": "Blood Panel"}, {"inlineData": {}}, {"text": "Fine."}]}}
            ]
        }
        handler = _Recorder(httpx.Response(200, json=payload))
        assert _generate(_adapter(handler)) == "Blood Panel\nFine."

    def test_non_success_status_is_invalid_response(self) -> None:
        handler = _Recorder(httpx.Response(429, json={"error": {"message": "quota"}}))
        with pytest.raises(InvalidResponseError, match="HTTP 429"):
            _generate(_adapter(handler))

    def test_undecodable_body_is_invalid_response(self) -> None:
        handler = _Recorder(httpx.Response(200, content=b"<html>oops</html>"))
        with pytest.raises(InvalidResponseError):
            _generate(_adapter(handler))

    def test_non_object_body_is_invalid_response(self) -> None:
        handler = _Recorder(httpx.Response(200, json=["not", "an", "object"]))
        with pytest.raises(InvalidResponseError):
            _generate(_adapter(handler))

    @pytest.mark.parametrize("payload", [{}, {"candidates": []}])
    def test_no_candidates_is_empty_output(self, payload: dict[str, object]) -> None:
        handler = _Recorder(httpx.Response(200, json=payload))
        with pytest.raises(EmptyOutputError, match="no candidates"):
            _generate(_adapter(handler))

    @pytest.mark.parametrize(
        "candidate",
        [{}, {"content": {"parts": []}}, {"content": {"parts": [{"text": "   "}]}}],
    )
    def test_blank_candidate_is_empty_output(self, candidate: dict[str, object]) -> None:
        handler = _Recorder(httpx.Response(200, json={"candidates": [candidate]}))
        with pytest.raises(EmptyOutputError, match="empty response"):
            _generate(_adapter(handler))

    def test_malformed_candidates_is_invalid_response(self) -> None:
        handler = _Recorder(httpx.Response(200, json={"candidates": ["text"]}))
        with pytest.raises(InvalidResponseError, match="malformed"):
            _generate(_adapter(handler))


class TestTransportFailures:
    def test_connect_error_is_network_error(self) -> None:
        handler = _Recorder(httpx.ConnectError("refused"))
        with pytest.raises(SummarizationNetworkError, match="network error"):
            _generate(_adapter(handler))

    def test_timeout_is_network_error(self) -> None:
        handler = _Recorder(httpx.ReadTimeout("slow"))
        with pytest.raises(SummarizationNetworkError, match="network error"):
            _generate(_adapter(handler))


class TestClose:
    def test_close_shuts_http_client(self) -> None:
        adapter = _adapter(_Recorder(httpx.Response(200, json=_ok("ok"))))

        adapter.close()

        assert adapter._client.is_closed
