"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    portfolio_api_base: str = "https://msme-credit-backend.onrender.com"

    # Service
    service_name: str = "msme-dashboard"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 30.0

    # Number of MSMEs scored per model upstream; Rejected = cohort_size - Approved
    cohort_size: int = 10


settings = Settings()
