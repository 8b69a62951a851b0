from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(alias="DATABASE_URL")
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")

    celery_broker_url: str = Field(default="redis://localhost:6379/1", alias="CELERY_BROKER_URL")
    celery_result_backend: str = Field(default="redis://localhost:6379/2", alias="CELERY_RESULT_BACKEND")

    # Empty secret switches the webhook into unverified (dev/test) mode.
    stripe_webhook_secret: str = Field(default="", alias="STRIPE_WEBHOOK_SECRET")
    stripe_webhook_tolerance_seconds: int = Field(
        default=300,
        alias="STRIPE_WEBHOOK_TOLERANCE_SECONDS",
    )

    cors_allowed_origins: str = Field(default="*", alias="CORS_ALLOWED_ORIGINS")

    auth_jwt_secret: str = Field(alias="AUTH_JWT_SECRET")
    auth_jwt_audience: str = Field(default="authenticated", alias="AUTH_JWT_AUDIENCE")
    auth_jwt_algorithms: str = Field(default="HS256", alias="AUTH_JWT_ALGORITHMS")

    default_entitlement_key: str = Field(default="season_1", alias="DEFAULT_ENTITLEMENT_KEY")
    entitlement_repair_batch_size: int = Field(default=200, alias="ENTITLEMENT_REPAIR_BATCH_SIZE")

    @property
    def webhook_signature_required(self) -> bool:
        return bool(self.stripe_webhook_secret)

    @property
    def auth_jwt_algorithm_list(self) -> list[str]:
        return [item.strip() for item in self.auth_jwt_algorithms.split(",") if item.strip()]

    @property
    def cors_allowed_origin_list(self) -> list[str]:
        return [item.strip() for item in self.cors_allowed_origins.split(",") if item.strip()]

    @model_validator(mode="after")
    def _require_webhook_secret_in_prod(self) -> "Settings":
        if self.app_env == "prod" and not self.stripe_webhook_secret:
            raise ValueError("STRIPE_WEBHOOK_SECRET must be set when APP_ENV=prod")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
