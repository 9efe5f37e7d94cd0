"""Unit tests for user_service module."""

import unittest
from datetime import datetime, timedelta, timezone

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import NotFoundError
from domain.model.user import User
from services import user_service

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _user(user_id: str, email: str, created_at: datetime = NOW) -> User:
    return User(
        id=user_id,
        name=f'User {user_id}',
        email=email,
        created_at=created_at,
        updated_at=created_at,
        password_hash='$2b$04$hash',
        reset_password_token='reset-token',
    )


class TestUserService(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.repo.create(_user('u1', 'one@example.com', NOW))
        self.repo.create(_user('u2', 'two@example.com', NOW + timedelta(days=1)))

    def test_list_users_newest_first_without_secrets(self):
        users = user_service.list_users(self.repo)

        self.assertEqual([u.id for u in users], ['u2', 'u1'])
        for user in users:
            self.assertIsNone(user.password_hash)
            self.assertIsNone(user.reset_password_token)

    def test_get_user(self):
        user = user_service.get_user(self.repo, 'u1')
        self.assertEqual(user.email, 'one@example.com')
        self.assertIsNone(user.password_hash)

    def test_get_user_missing(self):
        with self.assertRaises(NotFoundError):
            user_service.get_user(self.repo, 'missing')

    def test_update_user_changes_only_supplied_fields(self):
        user = user_service.update_user(self.repo, 'u1', name='Renamed')

        self.assertEqual(user.name, 'Renamed')
        self.assertEqual(user.email, 'one@example.com')
        self.assertIsNone(user.profile_picture)
        self.assertGreater(self.repo.get_by_id('u1').updated_at, NOW)

    def test_update_user_deactivates(self):
        user = user_service.update_user(self.repo, 'u1', is_active=False)

        self.assertFalse(user.is_active)
        self.assertFalse(self.repo.get_by_id('u1').is_active)

    def test_update_user_without_fields_returns_current(self):
        user = user_service.update_user(self.repo, 'u1')
        self.assertEqual(user.name, 'User u1')

    def test_update_user_missing(self):
        with self.assertRaises(NotFoundError):
            user_service.update_user(self.repo, 'missing', name='x')

    def test_remove_user(self):
        user_service.remove_user(self.repo, 'u1')

        self.assertIsNone(self.repo.get_by_id('u1'))
        with self.assertRaises(NotFoundError):
            user_service.remove_user(self.repo, 'u1')


if __name__ == '__main__':
    unittest.main()
