from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    pdf_render_dpi: int = 200
    pdf_scratch_dir: str = ""
    pdf_scratch_stale_seconds: int = 3600

    llm_provider: str = "ollama"
    llm_temperature: float = 0.0

    llm_ollama_base_url: str = "http://localhost:11434"
    llm_ollama_model_name: str = "qwen3-vl:2b"
    llm_ollama_timeout_seconds: int = 300
    llm_ollama_response_fields: list[str] = ["thinking", "response"]

    llm_openai_api_key: str = ""
    llm_openai_model_name: str = "gpt-4o-mini"
    llm_openai_timeout_seconds: int = 300

    llm_openai_compatible_base_url: str = ""
    llm_openai_compatible_api_key: str = ""
    llm_openai_compatible_model_name: str = ""
    llm_openai_compatible_timeout_seconds: int = 300

    llm_openrouter_api_key: str = ""
    llm_openrouter_model_name: str = ""
    llm_openrouter_timeout_seconds: int = 300

    llm_together_api_key: str = ""
    llm_together_model_name: str = ""
    llm_together_timeout_seconds: int = 300
