from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid")

    database_url: str
    log_level: str = "info"
    admin_token: str = "dev-admin"

    # OTLP export needs a collector; local runs and tests switch it off.
    tracing_enabled: bool = True


SETTINGS = ApiSettings()
