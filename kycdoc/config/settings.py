from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:5173"

    persistence_backend: str = "postgres"
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "kycdoc"
    db_username: str = "kycdoc"
    db_password: str = "secret"

    files_root: Path = Path("/app/files")
    max_upload_bytes: int = 10 * 1024 * 1024

    image_max_dimension: int = 2000
    image_jpeg_quality: int = 90

    ocr_engine: str = "tesseract"
    ocr_languages: str = "eng+hin"
    ocr_timeout_seconds: int = 30

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_base_url: str | None = None
    openai_timeout_seconds: int = 30

    min_age_years: int = 18
    max_age_years: int = 120
    two_digit_year_pivot: int = 50
