"""Application settings using Pydantic BaseSettings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

TRELLO_API_URL = "https://api.trello.com/1"
TRELLO_AUTH_URL = "https://trello.com"
SANDBOX_TRELLO_URL = "http://localhost:8000/sandbox/trello"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Discord
    discord_webhook_url: str | None = None

    # GitHub
    github_secret: str | None = None

    # Trello
    trello_api_key: str | None = None
    trello_api_url: str = TRELLO_API_URL
    trello_auth_url: str = TRELLO_AUTH_URL
    trello_app_name: str = "Discord Notifications"

    # Hosting
    public_base_url: str | None = None
    log_level: str = "INFO"

    # Test mode overrides
    webhook_test_mode: bool = False
    discord_webhook_url_test: str | None = None
    github_secret_test: str | None = None
    trello_api_key_test: str | None = None
    trello_api_url_test: str = SANDBOX_TRELLO_URL


class RelayConfig(BaseModel):
    """Resolved, read-only configuration handed to every handler."""

    model_config = ConfigDict(frozen=True)

    discord_webhook_url: str = ""
    github_secret: str = ""
    trello_api_key: str = ""
    trello_api_url: str = TRELLO_API_URL
    trello_auth_url: str = TRELLO_AUTH_URL
    trello_app_name: str = "Discord Notifications"
    public_base_url: str | None = None
    test_mode: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> RelayConfig:
        """Resolve settings, preferring the ``*_TEST`` values in test mode.

        In test mode the Trello API URL also serves as the authorize host, so the
        sandbox (or any mock) can answer both.
        """
        if settings.webhook_test_mode:
            return cls(
                discord_webhook_url=settings.discord_webhook_url_test or "",
                github_secret=settings.github_secret_test or "",
                trello_api_key=settings.trello_api_key_test or "",
                trello_api_url=settings.trello_api_url_test.rstrip("/"),
                trello_auth_url=settings.trello_api_url_test.rstrip("/"),
                trello_app_name=settings.trello_app_name,
                public_base_url=settings.public_base_url,
                test_mode=True,
            )

        return cls(
            discord_webhook_url=settings.discord_webhook_url or "",
            github_secret=settings.github_secret or "",
            trello_api_key=settings.trello_api_key or "",
            trello_api_url=settings.trello_api_url.rstrip("/"),
            trello_auth_url=settings.trello_auth_url.rstrip("/"),
            trello_app_name=settings.trello_app_name,
            public_base_url=settings.public_base_url,
            test_mode=False,
        )


def load_config(settings: Settings | None = None) -> RelayConfig:
    """Build a RelayConfig from the environment (or the given settings)."""
    return RelayConfig.from_settings(settings or Settings())
