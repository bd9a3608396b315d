from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Cloudflare Radar
    cloudflare_api_url: str = Field(default="https://api.cloudflare.com/client/v4")
    cloudflare_account_id: str = Field(default="")
    upstream_timeout_seconds: float = Field(default=10.0)

    # Outage annotation query scope
    annotations_limit: int = Field(default=1000)
    annotations_date_range: str = Field(default="1d")

    # Aggregate cache lifetime (seconds)
    cache_ttl_seconds: float = Field(default=600.0)

    # JSON array of ISO country codes; empty uses the bundled list
    countries_file: str = Field(default="")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    environment: str = Field(default="local")
    log_level: str = Field(default="INFO")

    # CORS
    cors_origins: str = Field(default="")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def missing(self) -> list[str]:
        """Return env vars the token-verify route needs but are unset."""
        return [] if self.cloudflare_account_id else ["CLOUDFLARE_ACCOUNT_ID"]


settings = Settings()
