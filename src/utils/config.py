"""Service configuration read from the environment.

Values come from process environment variables, with a `.env` file loaded
first by python-dotenv. The resulting Settings object is handed to the token
issuer, the MongoDB client and the OAuth client when they are built.
"""

import os
import re
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from dotenv import load_dotenv

_DURATION_RE = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_DURATION_UNITS = {'': 'seconds', 's': 'seconds', 'm': 'minutes', 'h': 'hours', 'd': 'days'}


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as '24h', '7d', '30m', '45s' or '3600' (seconds).

    Raises:
        ValueError: value is not in a recognised format
    """
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str | None = None
    jwt_algorithm: str = 'HS256'
    jwt_expires_in: timedelta = timedelta(hours=24)
    mongo_url: str | None = None
    mongodb_database: str = 'auth_service'
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_callback_url: str | None = None
    frontend_url: str = 'http://localhost:3001'
    session_secret_key: str | None = None
    cors_origins: str = '*'
    log_level: str = 'INFO'
    port: int = 8000

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            jwt_secret_key=os.getenv('JWT_SECRET_KEY') or None,
            jwt_algorithm=os.getenv('JWT_ALGORITHM', 'HS256'),
            jwt_expires_in=parse_duration(os.getenv('JWT_EXPIRES_IN', '24h')),
            mongo_url=os.getenv('MONGO_URL') or None,
            mongodb_database=os.getenv('MONGODB_DATABASE', 'auth_service'),
            google_client_id=os.getenv('GOOGLE_CLIENT_ID') or None,
            google_client_secret=os.getenv('GOOGLE_CLIENT_SECRET') or None,
            google_callback_url=os.getenv('GOOGLE_CALLBACK_URL') or None,
            frontend_url=os.getenv('FRONTEND_URL', 'http://localhost:3001').rstrip('/'),
            session_secret_key=os.getenv('SESSION_SECRET_KEY') or None,
            cors_origins=os.getenv('CORS_ORIGINS', '*'),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            port=int(os.getenv('PORT', '8000')),
        )


@lru_cache
def get_settings() -> Settings:
    """Load .env once and return the process-wide Settings."""
    load_dotenv()
    return Settings.from_env()
