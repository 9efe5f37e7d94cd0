"""Profile CRUD over the user repository."""

from domain.model.errors import NotFoundError
from domain.model.user import User
from port.user_repository import UserRepository


def list_users(repo: UserRepository) -> list[User]:
    return [u.without_secrets() for u in repo.list_all()]


def get_user(repo: UserRepository, user_id: str) -> User:
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user.without_secrets()


def update_user(
    repo: UserRepository,
    user_id: str,
    name: str | None = None,
    profile_picture: str | None = None,
    is_active: bool | None = None,
) -> User:
    """Update profile fields that were supplied; others are left untouched.

    Passing is_active=False deactivates the account, which blocks local login.

    Raises:
        NotFoundError: no user with this id
    """
    fields = {
        key: value
        for key, value in (
            ('name', name),
            ('profile_picture', profile_picture),
            ('is_active', is_active),
        )
        if value is not None
    }
    if not fields:
        return get_user(repo, user_id)

    user = repo.update(user_id, fields)
    if not user:
        raise NotFoundError("User not found")
    return user.without_secrets()


def remove_user(repo: UserRepository, user_id: str) -> None:
    """Permanently delete a user.

    Raises:
        NotFoundError: no user with this id
    """
    if not repo.delete(user_id):
        raise NotFoundError("User not found")
