"""Example inference adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseLLMClient and register the provider in LLMClientFactory.
"""

import json
from collections.abc import Sequence
from typing import Any, ClassVar

from docextract.llm.client_base import BaseLLMClient


class ExampleClientAdapter(BaseLLMClient):
    """Adapter that answers every prompt with the same JSON object.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, Any]] = {}

    def __init__(self, response: dict[str, Any] | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    def infer(self, prompt: str, images: Sequence[str] | None = None) -> str:
        _ = prompt
        self._single_image(images)
        return json.dumps(self._response)

    def health_check(self) -> bool:
        return True

    def list_models(self) -> list[str]:
        return ["example"]
