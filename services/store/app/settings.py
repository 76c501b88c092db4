from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid")

    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "info"

    static_dir: str = "public"
    # Payment provider signatures are computed over the exact request bytes.
    webhook_path: str = "/webhook/stripe"
    max_body_size: int = 100 * 1024

    tracing_enabled: bool = False


SETTINGS = StoreSettings()
