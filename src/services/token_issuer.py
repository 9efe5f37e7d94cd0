"""Bearer token issuance and verification (JWT, HS256 by default).

Tokens are stateless: there is no revocation list, so logout is left to the
client discarding its token.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.user import User
from utils.config import Settings


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by an access token."""
    sub: str
    email: str | None
    iat: int
    exp: int


class TokenIssuer:
    def __init__(self, secret_key: str | None, algorithm: str = 'HS256',
                 expires_in: timedelta = timedelta(hours=24)):
        if not secret_key:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> 'TokenIssuer':
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, settings.jwt_expires_in)

    def issue(self, user: User) -> str:
        """Create JWT access token for user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload | None:
        """Decode a token. Return None on bad signature, expiry or missing subject."""
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        subject = claims.get("sub")
        if not subject or "exp" not in claims:
            return None
        return TokenPayload(
            sub=subject,
            email=claims.get("email"),
            iat=claims.get("iat", 0),
            exp=claims["exp"],
        )
