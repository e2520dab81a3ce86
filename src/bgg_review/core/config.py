from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # BoardGameGeek XML API 2
    bgg_base_url: str = "https://boardgamegeek.com/xmlapi2"
    bgg_api_token: str | None = Field(default=None, repr=False)

    # HTTP
    http_timeout_s: float = 30.0
    http_connect_timeout_s: float = 10.0

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False

    def bgg_headers(self) -> dict[str, str]:
        if not self.bgg_api_token:
            return {}
        return {"Authorization": f"Bearer {self.bgg_api_token}"}


settings = Settings()
