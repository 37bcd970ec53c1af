"""Application configuration via environment variables."""

import re

from pydantic_settings import BaseSettings

DEV_JWT_SECRET = "dev-secret-change-in-production"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """Convert a duration like ``"7d"``, ``"12h"``, ``"30m"`` or ``"3600"`` to seconds."""
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit]


class Settings(BaseSettings):
    # Runtime
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "info"

    # Database
    database_url: str = "sqlite+aiosqlite:///spec_manager.db"
    seed_on_startup: bool = False

    # JWT
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "spec-manager-api"
    jwt_expires_in: str = "7d"

    # Password hashing
    bcrypt_rounds: int = 12

    # CORS (comma-separated)
    cors_origin: str = "http://localhost:3000"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_window_ms: int = 900_000
    rate_limit_max_requests: int = 100
    auth_rate_limit: str = "5/15 minutes"
    rate_limit_storage_uri: str = "memory://"

    # Seeded default schema
    default_schema_id: str = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]

    @property
    def jwt_expires_in_seconds(self) -> int:
        return parse_duration(self.jwt_expires_in)

    @property
    def default_rate_limit(self) -> str:
        """slowapi limit string built from the window/max pair."""
        window_seconds = max(1, self.rate_limit_window_ms // 1000)
        return f"{self.rate_limit_max_requests}/{window_seconds} seconds"


settings = Settings()
