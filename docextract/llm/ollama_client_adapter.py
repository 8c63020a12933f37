from collections.abc import Sequence
from typing import Any, ClassVar

import httpx

from docextract.llm.client_base import BaseLLMClient, first_populated
from docextract.llm.exceptions import LLMTransportError, LLMUnavailableError
from docextract.logging.logger import Log


class OllamaClientAdapter(BaseLLMClient):
    """Inference adapter for an Ollama runtime (``/api/generate``).

    Some vision models answer under ``thinking`` instead of ``response``;
    the lookup order is configurable through ``response_fields``.
    """

    DEFAULT_RESPONSE_FIELDS: ClassVar[tuple[str, ...]] = ("thinking", "response")

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        timeout_seconds: int,
        temperature: float = 0.0,
        response_fields: Sequence[str] | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._response_fields = tuple(response_fields or self.DEFAULT_RESPONSE_FIELDS)
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={"Content-Type": "application/json"},
        )

    def infer(self, prompt: str, images: Sequence[str] | None = None) -> str:
        image = self._single_image(images)
        body: dict[str, Any] = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
            "options": {"temperature": self._temperature},
        }
        if image is not None:
            body["images"] = [image]

        try:
            response = self._client.post("/api/generate", json=body)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise LLMTransportError(f"Inference timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise LLMTransportError(
                f"Inference endpoint returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise LLMTransportError(f"Inference network error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise LLMUnavailableError(
                f"Inference endpoint returned a non-JSON body: {exc}"
            ) from exc
        if not isinstance(payload, dict):
            raise LLMUnavailableError("Inference endpoint returned an unexpected body")

        try:
            return first_populated(payload, self._response_fields)
        except LLMUnavailableError:
            Log.error(f"LLM response structure: {sorted(payload)}")
            raise

    def health_check(self) -> bool:
        try:
            self._client.get("/api/tags").raise_for_status()
        except httpx.HTTPError as exc:
            Log.warning(f"LLM health check failed: {exc}")
            return False
        return True

    def list_models(self) -> list[str]:
        try:
            response = self._client.get("/api/tags")
            response.raise_for_status()
            models = response.json().get("models") or []
            return [m["name"] for m in models if isinstance(m, dict) and "name" in m]
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            Log.error(f"Failed to list models: {exc}")
            return []
