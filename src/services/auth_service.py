"""Registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import uuid
from datetime import datetime, timezone

import bcrypt

from domain.model.errors import (
    AccountDeactivatedError,
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
)
from domain.model.user import AuthProvider, AuthResult, OAuthIdentity, User
from port.user_repository import UserRepository
from services.token_issuer import TokenIssuer

BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # JSON can carry lone surrogates; keep them as their raw code units
    return password.encode("utf-8", "surrogatepass")[:BCRYPT_MAX_BYTES]


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))


def _new_user(
    email: str,
    name: str,
    auth_provider: AuthProvider,
    password_hash: str | None = None,
    profile_picture: str | None = None,
    provider_id: str | None = None,
) -> User:
    now = datetime.now(timezone.utc)
    return User(
        id=uuid.uuid4().hex,
        name=name,
        email=email,
        created_at=now,
        updated_at=now,
        password_hash=password_hash,
        profile_picture=profile_picture,
        auth_provider=auth_provider,
        provider_id=provider_id,
    )


def _create(repo: UserRepository, user: User) -> User:
    created = repo.create(user)
    if not created:
        raise DomainError("Failed to create user")
    return created


def validate_user(repo: UserRepository, email: str, password: str) -> User:
    """Check local credentials and return the user without secrets.

    Unknown email, OAuth-only account and wrong password all raise the same
    error. Deactivation is only reported once the password has matched.

    Raises:
        InvalidCredentialsError: credentials do not match a local account
        AccountDeactivatedError: credentials match but the account is inactive
    """
    user = repo.get_by_email(email)
    if not user or not user.password_hash:
        raise InvalidCredentialsError()

    if not _verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    if not user.is_active:
        raise AccountDeactivatedError()

    return user.without_secrets()


def validate_oauth_user(repo: UserRepository, identity: OAuthIdentity) -> User:
    """Resolve a verified OAuth identity to a local user.

    A returning identity is matched on (provider, provider_id) before the
    email is consulted, so linked users never hit the email collision check.
    Accounts are never merged: an email owned by another account is refused.

    Raises:
        DuplicateError: email already belongs to a different account
    """
    user = repo.get_by_provider(identity.provider, identity.provider_id)
    if user:
        if repo.update_last_login(user.id):
            user = repo.get_by_id(user.id) or user
        return user.without_secrets()

    if repo.get_by_email(identity.email):
        raise DuplicateError(
            "An account with this email already exists. Please sign in with your password."
        )

    user = _create(repo, _new_user(
        email=identity.email,
        name=identity.name,
        auth_provider=identity.provider,
        profile_picture=identity.profile_picture,
        provider_id=identity.provider_id,
    ))
    return user.without_secrets()


def register(
    repo: UserRepository,
    issuer: TokenIssuer,
    email: str,
    password: str,
    name: str,
    profile_picture: str | None = None,
) -> AuthResult:
    """Register a new local user and issue their first token.

    Raises:
        DuplicateError: email already registered (also when a concurrent
            registration wins the race and the store rejects the insert)
    """
    if repo.get_by_email(email):
        raise DuplicateError("User with this email already exists")

    user = _create(repo, _new_user(
        email=email,
        name=name,
        auth_provider=AuthProvider.LOCAL,
        password_hash=_hash_password(password),
        profile_picture=profile_picture,
    ))
    return AuthResult(user=user.without_secrets(), access_token=issuer.issue(user))


def login(repo: UserRepository, issuer: TokenIssuer, user: User) -> AuthResult:
    """Record the login and issue a token for an already validated user."""
    if repo.update_last_login(user.id):
        user = repo.get_by_id(user.id) or user
    return AuthResult(user=user.without_secrets(), access_token=issuer.issue(user))


def get_profile(repo: UserRepository, user_id: str) -> User:
    """Return the user's profile without secrets.

    Raises:
        NotFoundError: the id no longer resolves to a user
    """
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user.without_secrets()
