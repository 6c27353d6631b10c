"""Gemini generateContent adapter.

Request shape::

    {
      "systemInstruction": {"role": "system", "parts": [{"text": ...}]},
      "contents": [{"role": "user", "parts": [{"text": ...},
                                              {"inlineData": {"mimeType": ..., "data": ...}}]}],
      "generationConfig": {"temperature": ..., "maxOutputTokens": ...}
    }

A successful answer is a 2xx JSON body ``{"candidates": [{"content": {"parts": [{"text": ...}]}}]}``.
"""

from typing import Any

import httpx

from docucare.summarization.client_base import BaseGenerativeClient
from docucare.summarization.exceptions import (
    EmptyOutputError,
    InvalidResponseError,
    MissingCredentialError,
    SummarizationNetworkError,
)
from docucare.summarization.models import EncodedImage


class GeminiClientAdapter(BaseGenerativeClient):
    """Generative client adapter for the Gemini REST API."""

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: int = 30,
        max_retries: int = 2,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._client = httpx.Client(
            timeout=timeout_seconds,
            transport=transport or httpx.HTTPTransport(retries=max_retries),
        )

    def generate(
        self,
        *,
        system_instruction: str,
        text: str,
        images: list[EncodedImage],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        if not self._api_key:
            raise MissingCredentialError("Gemini API key is not configured")

        body = self._build_body(system_instruction, text, images, temperature, max_output_tokens)
        try:
            response = self._client.post(
                self._url,
                json=body,
                headers={"x-goog-api-key": self._api_key},
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SummarizationNetworkError(f"AI provider network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise SummarizationNetworkError(f"AI provider transport error: {exc}") from exc

        if not response.is_success:
            raise InvalidResponseError(
                f"AI provider returned HTTP {response.status_code}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidResponseError(f"AI provider returned an undecodable body: {exc}") from exc

        return self._extract_text(payload)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _build_body(
        system_instruction: str,
        text: str,
        images: list[EncodedImage],
        temperature: float,
        max_output_tokens: int,
    ) -> dict[str, Any]:
        parts: list[dict[str, Any]] = [{"text": text}]
        parts.extend(
            {"inlineData": {"mimeType": image.mime_type, "data": image.data}}
            for image in images
        )
        return {
            "systemInstruction": {"role": "system", "parts": [{"text": system_instruction}]},
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }

    @staticmethod
    def _extract_text(payload: Any) -> str:
        if not isinstance(payload, dict):
            raise InvalidResponseError("AI provider response must be a JSON object")
        candidates = payload.get("candidates")
        if not candidates:
            raise EmptyOutputError("AI returned no candidates")
        if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
            raise InvalidResponseError("AI provider response has malformed candidates")

        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        texts = [
            part["text"]
            for part in parts or []
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        output = "\n".join(texts).strip()
        if not output:
            raise EmptyOutputError("AI returned empty response")
        return output
