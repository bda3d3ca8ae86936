"""Process configuration.

Read once from environment variables (``.env`` supported via python-dotenv)
and immutable afterwards.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_TOKEN_VALIDITY_HOURS = 72
DEFAULT_BCRYPT_ROUNDS = 12
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Startup configuration shared read-only by every request."""
    jwt_secret: str = field(repr=False)
    token_validity: timedelta = timedelta(hours=DEFAULT_TOKEN_VALIDITY_HOURS)
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    mongo_url: str | None = None
    database_name: str = "sigmacoder"
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = field(default=None, repr=False)
    twilio_service_sid: str | None = None
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @property
    def twilio_configured(self) -> bool:
        return bool(self.twilio_account_sid and self.twilio_auth_token and self.twilio_service_sid)


def load_settings() -> Settings:
    """Build Settings from the environment.

    Raises:
        ValueError: JWT_SECRET missing or a numeric variable is malformed
    """
    load_dotenv()

    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        raise ValueError(
            "JWT_SECRET environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    validity_hours = _int_env("TOKEN_VALIDITY_HOURS", DEFAULT_TOKEN_VALIDITY_HOURS)
    if validity_hours <= 0:
        raise ValueError("TOKEN_VALIDITY_HOURS must be positive")

    bcrypt_rounds = _int_env("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)
    if not 4 <= bcrypt_rounds <= 31:
        raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")

    timeout = _float_env("REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS)
    if timeout <= 0:
        raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")

    return Settings(
        jwt_secret=jwt_secret,
        token_validity=timedelta(hours=validity_hours),
        bcrypt_rounds=bcrypt_rounds,
        mongo_url=os.getenv("MONGO_URL") or os.getenv("MONGO_URI"),
        database_name=os.getenv("MONGODB_DATABASE", "sigmacoder"),
        twilio_account_sid=os.getenv("TWILIO_ACCOUNT_SID"),
        twilio_auth_token=os.getenv("TWILIO_AUTH_TOKEN") or os.getenv("TWILIO_AUTHTOKEN"),
        twilio_service_sid=os.getenv("TWILIO_SERVICES_ID"),
        request_timeout_seconds=timeout,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide Settings, loaded on first use."""
    return load_settings()
