"""
Application configuration settings.
"""
from functools import lru_cache

from fastapi import Request
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Food Rescue Squad"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    database_url: str = "sqlite+aiosqlite:///./food_rescue.db"
    db_host: str | None = None
    db_port: int = 3306
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    db_pool_size: int = 10

    # Security
    secret_key: str = "your-secret-key"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10
    enforce_roles: bool = False

    # CORS - Use ["*"] to allow all origins
    cors_origins: list[str] = ["*"]

    @model_validator(mode="after")
    def compose_database_url(self) -> "Settings":
        """Build a MySQL URL when discrete DB_* variables are provided."""
        if self.db_host:
            self.database_url = (
                f"mysql+aiomysql://{self.db_user}:{self.db_password}"
                f"@{self.db_host}:{self.db_port}/{self.db_name}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the running application was built with."""
    return request.app.state.settings
