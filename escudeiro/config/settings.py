"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Variables are read without a prefix so that WEB_ROOT, SERVER_PORT and
PROXY_TARGET can be set directly in the environment or in a .env file.
"""

from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Escudeiro", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, description="Server port")
    idle_timeout: int = Field(default=60, description="Keep-alive idle timeout in seconds")
    shutdown_timeout: int = Field(default=30, description="Graceful shutdown timeout in seconds")

    # Web Root Configuration
    web_root: Optional[Path] = Field(default=None, description="Directory served by the server")

    # PHP Configuration
    php_binary: str = Field(default="php", description="PHP interpreter used for .php files")
    php_timeout: float = Field(default=10.0, description="PHP execution timeout in seconds")

    # Proxy Configuration
    proxy_target: Optional[str] = Field(
        default=None, description="Backend URL for /api/ requests; proxy is disabled when unset"
    )
    proxy_timeout: float = Field(default=10.0, description="Proxy request timeout in seconds")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Path = Field(default=Path("./logs"), description="Log files directory")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("proxy_target")
    @classmethod
    def normalize_proxy_target(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty PROXY_TARGET as unset and drop trailing slashes."""
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")

    @property
    def proxy_enabled(self) -> bool:
        return self.proxy_target is not None

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix=""
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
