from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    # Base URL the summarization providers use to fetch uploaded text.
    server_url: str = "http://localhost:5678"

    storage_backend: str = "postgres"
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docintel"
    db_username: str = "docintel"
    db_password: str = "secret"

    pdf_engine: str = "pdfplumber"
    # 0 reads every page.
    pdf_max_pages: int = 0

    provider_timeout_seconds: int = 30
    extraction_providers: str = "bytez,gemini,openai"
    summary_providers: str = "apyhub,llm"

    summary_max_chars: int = 8000
    summary_chunk_overlap: int = 500
    summary_max_depth: int = 5
    summary_min_chars: int = 100
    max_snippet_chars: int = 3000
    raw_snippet_chars: int = 1000

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_base_url: str = ""

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-1.5-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"

    bytez_api_key: str = ""
    bytez_base_url: str = "https://api.bytez.com/models/v2"
    bytez_document_model: str = "svjack/dialogue-summary"
    bytez_summary_model: str = "svjack/dialogue-summary"

    apyhub_token: str = ""
    apyhub_base_url: str = "https://api.apyhub.com"
    apyhub_output_language: str = "en"

    llm_provider: str = "openai"
    llm_api_key: str = ""
    llm_model_name: str = "gpt-4o"
    llm_base_url: str = ""
    llm_temperature: float = 0.2

    @property
    def extraction_provider_order(self) -> list[str]:
        return _split_names(self.extraction_providers)

    @property
    def summary_provider_order(self) -> list[str]:
        return _split_names(self.summary_providers)


def _split_names(raw: str) -> list[str]:
    return [name.strip().lower() for name in raw.split(",") if name.strip()]
