from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class AuthProvider(str, Enum):
    """Identity provider a user account was created through.

    Only LOCAL and GOOGLE have a sign-in path. FACEBOOK and TWITTER are
    reserved values kept so stored documents round-trip.
    """
    LOCAL = 'local'
    GOOGLE = 'google'
    FACEBOOK = 'facebook'
    TWITTER = 'twitter'


@dataclass
class User:
    """Domain model representing a user account."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None = None
    password_hash: str | None = None
    profile_picture: str | None = None
    auth_provider: AuthProvider = AuthProvider.LOCAL
    provider_id: str | None = None
    is_active: bool = True
    email_verified: bool = False
    email_verification_token: str | None = None
    reset_password_token: str | None = None
    reset_password_expires: datetime | None = None

    def without_secrets(self) -> 'User':
        """Return a copy safe to hand outward (no hash, no one-time tokens)."""
        return replace(
            self,
            password_hash=None,
            email_verification_token=None,
            reset_password_token=None,
            reset_password_expires=None,
        )


@dataclass(frozen=True)
class OAuthIdentity:
    """Identity attributes asserted by a completed OAuth exchange."""
    email: str
    name: str
    provider: AuthProvider
    provider_id: str
    profile_picture: str | None = None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register or login: public user + bearer token."""
    user: User
    access_token: str
