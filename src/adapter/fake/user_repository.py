"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from domain.model.errors import DuplicateError
from domain.model.user import AuthProvider, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User | None:
        # Same unique keys the Mongo indexes enforce
        if any(u.email == user.email for u in self.store.values()):
            raise DuplicateError("User with this email already exists")
        if user.provider_id is not None and self.get_by_provider(user.auth_provider, user.provider_id):
            raise DuplicateError("User with this provider identity already exists")

        self.store[user.id] = replace(user)
        return replace(user)

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        updated = replace(user, **fields, updated_at=datetime.now(timezone.utc))
        self.store[user_id] = updated
        return replace(updated)

    def update_last_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        now = datetime.now(timezone.utc)
        user.last_login = now
        user.updated_at = now
        return True

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def get_by_provider(self, provider: AuthProvider, provider_id: str) -> User | None:
        for user in self.store.values():
            if user.auth_provider == provider and user.provider_id == provider_id:
                return replace(user)
        return None

    def list_all(self) -> list[User]:
        users = sorted(self.store.values(), key=lambda u: u.created_at, reverse=True)
        return [replace(u) for u in users]
