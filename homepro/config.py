# homepro/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-01.v1"
    database_url: str = "sqlite:///./homepro.db"
    app_url: str = "http://localhost:3000"

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Auth ----
    auth_mode: str = "dev"  # dev|jwt
    auth_jwt_secret: str | None = None
    auth_jwks_url: str | None = None
    auth_jwt_audience: str | None = None
    auth_jwt_issuer: str | None = None
    auth_email_claim: str = "email"

    # Dev header names
    dev_header_user_id: str = "X-User-Id"
    dev_header_user_email: str = "X-User-Email"

    # Shared secret for scheduled callers (Authorization: Bearer <secret>)
    cron_secret: str | None = None

    # ---- Rate limiting ----
    rate_limit_requests: int = 60
    rate_limit_window_ms: int = 60_000
    rate_limit_disabled: bool = False

    # ---- Email (Resend) ----
    resend_api_key: str | None = None
    resend_from_email: str = "Home Maintenance Pro <noreply@example.com>"
    resend_base_url: str = "https://api.resend.com"

    # ---- Push (OneSignal) ----
    onesignal_app_id: str | None = None
    onesignal_rest_api_key: str | None = None
    onesignal_base_url: str = "https://onesignal.com/api/v1"

    # ---- Uploads ----
    blob_read_write_token: str | None = None
    blob_base_url: str = "https://blob.vercel-storage.com"
    cloudinary_url: str | None = None  # cloudinary://<key>:<secret>@<cloud>
    cloudinary_upload_preset: str | None = None
    upload_max_bytes: int = 10 * 1024 * 1024
    image_max_dimension: int = 1920
    image_quality: int = 85

    # ---- Property / climate enrichment ----
    rentcast_api_key: str | None = None
    rentcast_base_url: str = "https://api.rentcast.io/v1"

    rapidapi_key: str | None = None
    rapidapi_zillow_host: str = "zillow-com1.p.rapidapi.com"

    enable_web_scraping: bool = False
    scraper_max_requests: int = 5
    scraper_window_seconds: float = 60.0
    scraper_timeout_seconds: float = 10.0

    census_geocoder_url: str = "https://geocoding.geo.census.gov/geocoder/locations/address"

    property_cache_days: int = 30
    zip_cache_days: int = 90

    def model_post_init(self, __context) -> None:
        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        if is_prod:
            if (self.auth_mode or "").strip().lower() == "dev":
                raise ValueError("SECURITY: auth_mode=dev is not allowed in prod")
            if not (self.auth_jwt_secret or self.auth_jwks_url):
                raise ValueError("SECURITY: auth_mode=jwt needs auth_jwt_secret or auth_jwks_url")

            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
