from typing import Any, ClassVar

from docextract.config.settings import Settings
from docextract.llm.client_base import BaseLLMClient
from docextract.llm.example_client_adapter import ExampleClientAdapter
from docextract.llm.ollama_client_adapter import OllamaClientAdapter
from docextract.llm.openai_client_adapter import OpenAIClientAdapter

DEFAULT_TIMEOUT_SECONDS = 300


class LLMClientFactory:
    """Creates the configured inference client.

    ``ollama`` talks to the native generate endpoint; ``openai``,
    ``openai_compatible`` and the hosted providers in
    ``OPENAI_COMPATIBLE_BASE_URLS`` share the OpenAI chat adapter and read
    their credentials from ``llm_<provider>_*`` settings.
    """

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "together": "https://api.together.xyz/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseLLMClient:
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "ollama":
            return OllamaClientAdapter(
                base_url=settings.llm_ollama_base_url,
                model=settings.llm_ollama_model_name,
                timeout_seconds=settings.llm_ollama_timeout_seconds,
                temperature=settings.llm_temperature,
                response_fields=settings.llm_ollama_response_fields,
            )

        base_url = cls._resolve_base_url(provider, settings)
        return OpenAIClientAdapter(
            api_key=cls._setting(settings, provider, "api_key", ""),
            model=cls._setting(settings, provider, "model_name", ""),
            timeout_seconds=cls._setting(
                settings, provider, "timeout_seconds", DEFAULT_TIMEOUT_SECONDS
            ),
            base_url=base_url,
            temperature=settings.llm_temperature,
        )

    @classmethod
    def supported_providers(cls) -> list[str]:
        return [
            "example",
            "ollama",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.llm_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "llm_openai_compatible_base_url is required for llm_provider=openai_compatible"
                )
            return url
        if provider in cls.OPENAI_COMPATIBLE_BASE_URLS:
            return cls.OPENAI_COMPATIBLE_BASE_URLS[provider]
        raise ValueError(
            f"Unknown LLM provider '{provider}'. Choose from: {cls.supported_providers()}"
        )

    @staticmethod
    def _setting(settings: Settings, provider: str, name: str, default: Any) -> Any:
        # Empty values fall back to the default.
        return getattr(settings, f"llm_{provider}_{name}", None) or default
