"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    account_api_base: str = "http://localhost:8080"
    payment_api_base: str = "http://localhost:8081"

    # Payments
    payment_currency: str = "Eur"

    # Service
    service_name: str = "bank-portal"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
