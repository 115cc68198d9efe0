"""
Application configuration management.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Analysis engine (as seen by the workbench)
    engine_url: str = "http://127.0.0.1:4000"
    request_timeout_seconds: float = 10.0
    assist_timeout_seconds: float = 60.0

    # Bind addresses
    engine_host: str = "127.0.0.1"
    engine_port: int = 4000
    workbench_host: str = "127.0.0.1"
    workbench_port: int = 8000

    # OpenAI (used by the engine's repair assistant)
    openai_api_key: Optional[str] = None
    azure_openai_endpoint: Optional[str] = None
    azure_openai_api_key: Optional[str] = None
    azure_openai_deployment: Optional[str] = None
    assist_model: str = "gpt-4"

    # Application
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
