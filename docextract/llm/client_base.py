from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from docextract.llm.exceptions import LLMUnavailableError


class BaseLLMClient(ABC):
    """Contract for vision-capable LLM inference adapters."""

    @abstractmethod
    def infer(self, prompt: str, images: Sequence[str] | None = None) -> str:
        """Send one prompt with at most one base64 image and return the reply text.

        Raises:
            ValueError: if more than one image is given.
            LLMTransportError: on network, timeout or non-2xx failures.
            LLMUnavailableError: if the reply carries no usable text.
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Return True if the inference endpoint is reachable. Never raises."""

    @abstractmethod
    def list_models(self) -> list[str]:
        """Return the model names the endpoint offers, or [] on any failure."""

    @staticmethod
    def _single_image(images: Sequence[str] | None) -> str | None:
        if not images:
            return None
        if len(images) > 1:
            raise ValueError(f"Only one image per call is supported, got {len(images)}")
        return images[0]


def first_populated(payload: Mapping[str, object], fields: Sequence[str]) -> str:
    """Return the first non-empty string found under ``fields``, in priority order.

    Raises:
        LLMUnavailableError: if none of the fields holds text.
    """
    for name in fields:
        value = payload.get(name)
        if isinstance(value, str) and value.strip():
            return value
    raise LLMUnavailableError(
        f"No {' or '.join(repr(f) for f in fields)} field found in LLM output"
    )
