"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_comma_separated(value: str | None) -> list[str]:
    """Split a comma-separated input, trimming items and dropping empty ones."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars that don't match field names
    )

    # Application
    app_name: str = "Maintainers Sync"
    app_version: str = "0.1.0"

    # Roster
    maintainers_file_path: str = ""

    # GitHub
    github_token: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("gh_token", "github_token"),
    )
    github_org: str = Field(
        default="",
        validation_alias=AliasChoices("github_org", "github_repository_owner"),
    )
    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0

    # Ignore lists (comma-separated)
    ignored_repositories: str = ""
    ignored_users: str = ""

    # API cache
    cache_backend: Literal["file", "redis"] = "file"
    cache_file_path: str = ".maintainers-cache.json"
    cache_ttl_seconds: int = 86400  # 24 hours
    redis_url: str = "redis://localhost:6379/0"

    # Celery
    celery_broker_url: str = "redis://localhost:6379/1"
    celery_result_backend: str = "redis://localhost:6379/2"

    # Reporting
    step_summary_path: str = Field(
        default="",
        validation_alias=AliasChoices("step_summary_path", "github_step_summary"),
    )

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    @property
    def ignored_repos_set(self) -> set[str]:
        """Repository names excluded from the scan."""
        return set(parse_comma_separated(self.ignored_repositories))

    @property
    def ignored_users_set(self) -> set[str]:
        """Lower-cased usernames that never become maintainers."""
        return {user.lower() for user in parse_comma_separated(self.ignored_users)}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
