"""Workbench settings loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from jwtui.token.decoder import DEFAULT_LEEWAY_SECONDS


class WorkbenchSettings(BaseSettings):
    """Defaults applied when a caller leaves a decode option unset."""

    model_config = SettingsConfigDict(env_prefix="JWTUI_")

    default_secret: str = ""
    ignore_expiry: bool = False
    utc_time_format: bool = False
    leeway_seconds: int = DEFAULT_LEEWAY_SECONDS
    # @file secrets sent over HTTP must resolve inside this directory.
    # Unset disables them.
    key_dir: Path | None = None
    log_level: str = "INFO"
    cors_origins: str = ""

    def get_cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        if not self.cors_origins:
            return []
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
