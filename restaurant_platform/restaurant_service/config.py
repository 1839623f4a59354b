"""
Configuration management for the restaurant service
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Service configuration loaded from environment variables"""

    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./restaurants.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Identity provider (Auth0) Configuration
    AUTH0_AUDIENCE: str = ""
    AUTH0_ISSUER_BASE_URL: str = ""

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("AUTH0_ISSUER_BASE_URL")
    @classmethod
    def validate_issuer_base_url(cls, v: str) -> str:
        """Issuer must be an absolute http(s) URL when set"""
        if v and not v.startswith(("https://", "http://")):
            raise ValueError("AUTH0_ISSUER_BASE_URL must be an absolute http(s) URL")
        return v

    @property
    def auth0_configured(self) -> bool:
        return bool(self.AUTH0_AUDIENCE and self.AUTH0_ISSUER_BASE_URL)

    @property
    def auth0_issuer(self) -> str:
        """Issuer claim value, always with the trailing slash Auth0 emits"""
        return self.AUTH0_ISSUER_BASE_URL.rstrip("/") + "/"

    @property
    def auth0_jwks_url(self) -> str:
        return self.AUTH0_ISSUER_BASE_URL.rstrip("/") + "/.well-known/jwks.json"


# Global settings instance
settings = Settings()
