"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/selfcore/core/config.py
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "selfcore"
    app_env: str = Field(default="development", description="Application environment")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"selfcore.providers": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/selfcore.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of days to keep log files"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Enable logging of access tokens - NOT RECOMMENDED"
    )

    # Providers
    github_api_url: str = Field(default="https://api.github.com", description="GitHub REST API root")
    gitlab_api_url: str = Field(default="https://gitlab.com/api/v4", description="GitLab REST API root")
    bitbucket_api_url: str = Field(
        default="https://api.bitbucket.org/2.0",
        description="Bitbucket REST API root"
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout applied to every provider HTTP call (seconds)"
    )

    @field_validator("github_api_url", "gitlab_api_url", "bitbucket_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Provider roots are joined with '/' so they never end with one"""
        return v.rstrip("/")

    model_config = SettingsConfigDict(
        env_prefix="SELFCORE_",
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
