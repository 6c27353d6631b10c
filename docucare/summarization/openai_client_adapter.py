import httpx
import openai

from docucare.summarization.client_base import BaseGenerativeClient
from docucare.summarization.exceptions import (
    EmptyOutputError,
    InvalidResponseError,
    MissingCredentialError,
    SummarizationNetworkError,
)
from docucare.summarization.models import EncodedImage


class OpenAIClientAdapter(BaseGenerativeClient):
    """Generative client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        max_retries: int = 2,
        base_url: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=max_retries,
            base_url=base_url,
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
            raise MissingCredentialError("OpenAI API key is not configured")

        content: list[dict[str, object]] = [{"type": "text", "text": text}]
        content.extend(
            {
                "type": "image_url",
                "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"},
            }
            for image in images
        )
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=temperature,
                max_tokens=max_output_tokens,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": content},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SummarizationNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIStatusError as exc:
            raise InvalidResponseError(
                f"AI provider returned HTTP {exc.status_code}"
            ) from exc
        except openai.APIError as exc:
            raise InvalidResponseError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise EmptyOutputError("AI returned no choices")
        output = (response.choices[0].message.content or "").strip()
        if not output:
            raise EmptyOutputError("AI returned empty response")
        return output

    def close(self) -> None:
        self._client.close()
