"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    app_id: str = "lingo-live-app"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_anon_key: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def history_store_configured(self) -> bool:
        """Return true when the history store can be reached."""
        return bool(_clean(self.supabase_url) and _clean(self.supabase_service_key))

    @property
    def identity_key(self) -> str | None:
        """Key used for anonymous sign-in, preferring the anon key."""
        return _clean(self.supabase_anon_key) or _clean(self.supabase_service_key)


def _clean(raw: str | None) -> str | None:
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
