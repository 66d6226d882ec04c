from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # DB
    database_url: str = Field(
        default="sqlite+pysqlite:///./ign_check.db",
        validation_alias="DATABASE_URL",
    )
    db_echo: bool = False
    store_lookups: bool = True

    # codashop
    provider_base_url: str = "https://order-sg.codashop.com"
    provider_path: str = "/initPayment.action"
    provider_origin: str = "https://www.codashop.com"
    provider_shop_lang: str = "id_ID"

    api_timeout_ms: int = Field(default=10_000, validation_alias="API_TIMEOUT", gt=0)
    api_retries: int = Field(default=3, validation_alias="API_RETRIES", ge=1)
    retry_backoff_s: float = 1.0

    # HTTP service
    host: str = "0.0.0.0"
    port: int = Field(default=6969, validation_alias="PORT")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    cache_ttl_s: float = 300.0
    cache_max_entries: int = Field(default=10_000, ge=1)
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def api_timeout_s(self) -> float:
        return self.api_timeout_ms / 1000.0

    def cors_origin_list(self) -> list[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]


settings = Settings()
