from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docucare"
    db_username: str = "docucare"
    db_password: str = "secret"
    db_connect_timeout_seconds: int = 5
    db_pool_timeout_seconds: float = 10.0

    ocr_languages: str = "eng"
    ocr_engine_mode: int = 1
    max_page_workers: int = 0

    pdf_engine: str = "pymupdf"
    pdf_render_width: int = 1200
    pdf_render_height: int = 1550

    max_transcript_chars: int = 25_000

    summarization_provider: str = "gemini"
    summarization_timeout_seconds: int = 30
    summarization_max_retries: int = 2
    summarization_temperature: float = 0.2
    summarization_max_output_tokens: int = 500
    summarization_image_quality: int = 90

    summarization_gemini_api_key: str = ""
    summarization_gemini_model_name: str = "gemini-2.0-flash"
    summarization_gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    summarization_openai_api_key: str = ""
    summarization_openai_model_name: str = "gpt-4o-mini"
    summarization_openai_base_url: str | None = None
