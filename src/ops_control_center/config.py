import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ops_control_center.domain import HeartbeatKind

DEFAULT_HEARTBEAT_THRESHOLDS: dict[HeartbeatKind, int] = {
    HeartbeatKind.CRON_RETRY: 30,
    HeartbeatKind.PAYMENT_WEBHOOK: 120,
}


def _parse_thresholds(value: object) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return {}
        if raw.startswith("{"):
            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                raise ValueError("JSON thresholds env value must be an object.")
            return parsed
        pairs: dict[str, Any] = {}
        for item in raw.split(","):
            if not item.strip():
                continue
            kind, _, minutes = item.partition("=")
            pairs[kind.strip()] = minutes.strip()
        return pairs
    raise ValueError("Heartbeat thresholds must be a mapping or a 'kind=minutes' list.")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    supabase_url: str = Field(default="", alias="SUPABASE_URL")
    supabase_service_role_key: str = Field(default="", alias="SUPABASE_SERVICE_ROLE_KEY")
    fetch_timeout_sec: float = Field(default=8.0, alias="CONTROL_CENTER_FETCH_TIMEOUT_SEC")
    http_timeout_sec: float = Field(default=10.0, alias="CONTROL_CENTER_HTTP_TIMEOUT_SEC")
    pending_payments_alert_threshold: int = Field(
        default=10, alias="CONTROL_CENTER_PENDING_PAYMENTS_ALERT_THRESHOLD"
    )
    active_bookings_alert_threshold: int = Field(
        default=50, alias="CONTROL_CENTER_ACTIVE_BOOKINGS_ALERT_THRESHOLD"
    )
    heartbeat_thresholds: Annotated[dict[HeartbeatKind, int], NoDecode] = Field(
        default_factory=lambda: dict(DEFAULT_HEARTBEAT_THRESHOLDS),
        alias="CONTROL_CENTER_HEARTBEAT_THRESHOLDS",
    )
    environment: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("heartbeat_thresholds", mode="before")
    @classmethod
    def _parse_heartbeat_thresholds(cls, value: object) -> dict[str, Any]:
        return _parse_thresholds(value)

    @field_validator("heartbeat_thresholds")
    @classmethod
    def _check_heartbeat_thresholds(cls, value: dict[HeartbeatKind, int]) -> dict[HeartbeatKind, int]:
        for kind, minutes in value.items():
            if minutes <= 0:
                raise ValueError(f"Heartbeat threshold for {kind} must be positive.")
        return value

    @field_validator("supabase_url", "supabase_service_role_key", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @property
    def is_store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
