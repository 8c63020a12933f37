import base64
import binascii
from collections.abc import Sequence
from typing import Any, ClassVar

import httpx
import openai

from docextract.llm.client_base import BaseLLMClient, first_populated
from docextract.llm.exceptions import LLMTransportError, LLMUnavailableError
from docextract.logging.logger import Log

_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF8", "image/gif"),
    (b"RIFF", "image/webp"),
)


def guess_image_mime(image_base64: str) -> str:
    """Sniff the image type from the first decoded bytes; PNG when unknown."""
    try:
        head = base64.b64decode(image_base64[:32] + "=" * (-len(image_base64[:32]) % 4))
    except (binascii.Error, ValueError):
        return "image/png"
    for signature, mime in _IMAGE_SIGNATURES:
        if head.startswith(signature):
            return mime
    return "image/png"


class OpenAIClientAdapter(BaseLLMClient):
    """Inference adapter built on the OpenAI-compatible chat completions API."""

    RESPONSE_FIELDS: ClassVar[tuple[str, ...]] = ("content", "reasoning_content")
    JSON_INSTRUCTION: ClassVar[str] = "Respond with a single JSON object."

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        temperature: float = 0.0,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def infer(self, prompt: str, images: Sequence[str] | None = None) -> str:
        image = self._single_image(images)
        content: list[dict[str, Any]] = [
            {"type": "text", "text": f"{prompt}\n\n{self.JSON_INSTRUCTION}"}
        ]
        if image is not None:
            content.append({
                "type": "image_url",
                "image_url": {"url": f"data:{guess_image_mime(image)};base64,{image}"},
            })

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                response_format={"type": "json_object"},
                messages=[{"role": "user", "content": content}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LLMTransportError(f"Inference network error: {exc}") from exc
        except openai.APIError as exc:
            raise LLMTransportError(f"Inference API error: {exc}") from exc

        if not response.choices:
            raise LLMUnavailableError("LLM returned no choices")
        message = response.choices[0].message
        fields = {name: getattr(message, name, None) for name in self.RESPONSE_FIELDS}
        return first_populated(fields, self.RESPONSE_FIELDS)

    def health_check(self) -> bool:
        try:
            self._client.models.list()
        except (openai.APIError, httpx.HTTPError) as exc:
            Log.warning(f"LLM health check failed: {exc}")
            return False
        return True

    def list_models(self) -> list[str]:
        try:
            return [model.id for model in self._client.models.list()]
        except (openai.APIError, httpx.HTTPError) as exc:
            Log.error(f"Failed to list models: {exc}")
            return []
