# newsdesk/config.py
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./newsdesk.db"
    jwt_secret: str = "dev-secret-change-me"
    env: Literal["dev", "stage", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"
    access_log: bool = True
    sql_echo: bool = False
    allow_cors: bool = True
    port: int = 8080

    # Bootstrap administrator, created only when no admin exists yet
    default_admin_email: Optional[str] = "admin@example.com"
    default_admin_password: Optional[str] = "admin123"

    token_ttl_hours: int = 24
    db_wait_timeout_seconds: float = 30.0

    # Feed worker
    feed_worker_enabled: bool = True
    feed_poll_interval_seconds: int = 600
    feed_fetch_timeout_seconds: float = 15.0
    feed_log_level: Optional[str] = None

    @property
    def is_dev(self) -> bool:
        return self.env == "dev" or self.debug is True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
