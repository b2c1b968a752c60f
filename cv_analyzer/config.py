from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "CV Analyzer"
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024

    # LLM analysis (mock analysis is returned when no key is set)
    gemini_api_key: Optional[str] = None
    gemini_models: List[str] = ["gemini-2.0-flash", "gemini-1.5-flash", "gemini-1.5-pro"]

    # Extraction
    spacy_model: str = "en_core_web_sm"
    rules_path: Optional[str] = None  # JSON file overriding the built-in locale tables

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
