"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger
from typing import Any

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError
from domain.model.user import AuthProvider, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            # Partial so local accounts without provider_id don't collide
            create_index_safe(
                self.collection,
                [('auth_provider', 1), ('provider_id', 1)],
                'idx_users_provider',
                unique=True,
                partialFilterExpression={'provider_id': {'$type': 'string'}},
            )
            create_index_safe(self.collection, [('is_active', 1)], 'idx_users_active')
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
            profile_picture=doc.get('profile_picture'),
            auth_provider=AuthProvider(doc.get('auth_provider', AuthProvider.LOCAL.value)),
            provider_id=doc.get('provider_id'),
            is_active=doc.get('is_active', True),
            email_verified=doc.get('email_verified', False),
            email_verification_token=doc.get('email_verification_token'),
            reset_password_token=doc.get('reset_password_token'),
            reset_password_expires=doc.get('reset_password_expires'),
        )

    def _to_document(self, user: User) -> dict:
        doc = {
            '_id': user.id,
            'email': user.email,
            'name': user.name,
            'password_hash': user.password_hash,
            'profile_picture': user.profile_picture,
            'auth_provider': user.auth_provider.value,
            'provider_id': user.provider_id,
            'is_active': user.is_active,
            'email_verified': user.email_verified,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
            'last_login': user.last_login,
        }
        # Absent rather than null, so the partial provider index skips local users
        return {k: v for k, v in doc.items() if v is not None}

    def create(self, user: User) -> User | None:
        """Insert a new user and return it.

        Raises:
            DuplicateError: the email or provider identity is already taken
        """
        try:
            self.collection.insert_one(self._to_document(user))
            logger.info("User created", extra={"userId": user.id, "provider": user.auth_provider.value})
            return user
        except DuplicateKeyError as e:
            logger.warning("User creation failed: duplicate key", extra={"email": user.email})
            raise DuplicateError("User with this email already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": user.email, "error": str(e)})
            return None

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            return None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            return None

    def get_by_provider(self, provider: AuthProvider, provider_id: str) -> User | None:
        try:
            doc = self.collection.find_one({'auth_provider': provider.value, 'provider_id': provider_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by provider", extra={
                "provider": provider.value, "providerId": provider_id, "error": str(e)
            })
            return None

    def list_all(self) -> list[User]:
        try:
            cursor = self.collection.find({}).sort('created_at', DESCENDING)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            return []

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Set fields on a user. Return the updated User or None if not found."""
        updates = {k: (v.value if isinstance(v, AuthProvider) else v) for k, v in fields.items()}
        updates['updated_at'] = datetime.now(timezone.utc)
        try:
            result = self.collection.update_one({'_id': user_id}, {'$set': updates})
            if result.matched_count == 0:
                return None
            logger.debug("Updated user", extra={"userId": user_id, "fields": sorted(fields)})
            return self.get_by_id(user_id)
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            return None

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
            if result.modified_count > 0:
                logger.debug("Updated last_login", extra={"userId": user_id})
                return True
            return False
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    def delete(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
            if result.deleted_count > 0:
                logger.info("User deleted", extra={"userId": user_id})
                return True
            return False
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            return False
