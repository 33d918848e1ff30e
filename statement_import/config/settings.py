from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    pdf_line_tolerance: float = 3.0

    description_max_length: int = 200
    continuation_max_lines: int = 2
    default_institution: str = ""

    worker_poll_timeout_seconds: float = 0.5
