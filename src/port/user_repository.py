from typing import Any, Protocol
from domain.model.user import AuthProvider, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, user: User) -> User | None:
        """Persist a new user.

        Raise DuplicateError when the email or (provider, provider_id) pair
        is already taken. Return None if creation failed for another reason.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by exact email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_provider(self, provider: AuthProvider, provider_id: str) -> User | None:
        """Find a user by external identity. Return User or None if not found."""
        ...

    def list_all(self) -> list[User]:
        """Return all users, newest first."""
        ...

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Set the given fields on a user. Return the updated User or None if not found."""
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...

    def delete(self, user_id: str) -> bool:
        """Remove a user permanently. Return True if a user was removed."""
        ...
