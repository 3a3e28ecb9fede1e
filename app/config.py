"""
Application configuration using Pydantic Settings
"""

from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "xndoughs"

    # Redis (Celery broker for the worker deployment)
    redis_url: str = "redis://localhost:6379/0"

    # Email alerts
    email_user: str = ""
    email_password: str = ""
    admin_email: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587

    # Discord alerts
    discord_webhook_url: str = ""

    # Database maintenance
    enable_db_monitoring: bool = False
    cleanup_hour: int = 3
    archive_hour: int = 4

    # API Server
    api_host: str = "0.0.0.0"
    port: int = 3000
    api_debug: bool = False
    environment: str = "production"
    cors_origins: str = "https://xndoughs.quantumbytech.com,http://localhost:5173"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
