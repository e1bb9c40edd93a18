"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (transfer history)
    database_url: str = "sqlite:///./fincore.db"

    # External Services
    data_source_base: str = "http://localhost:8001"
    settlement_webhook_url: str = "http://localhost:8001/mock-settlement"

    # Service
    service_name: str = "fincore"
    log_level: str = "INFO"
    default_jurisdiction: str = "UK"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds


settings = Settings()
