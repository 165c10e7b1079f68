from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.collation import Collation, CollationStrength
from pymongo.errors import DuplicateKeyError

from tunebook.core.core import Service
from tunebook.core.modules.user.models import User
from tunebook.core.modules.user.validators import validate_email, validate_name, validate_password
from tunebook.errors import DuplicateIdentityError, NotFoundError

logger = structlog.get_logger(__name__)

CASE_INSENSITIVE = Collation(locale="en", strength=CollationStrength.SECONDARY)


def hash_password(password: str, rounds: int) -> str:
    """Hash a password with a per-password bcrypt salt.

    bcrypt only looks at the first 72 bytes of the input.
    """
    return bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class UserService(Service):
    """Credential store: users with in-memory cache."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._users: dict[UUID, User] = {}

    def get_user(self, user_id: UUID) -> User:
        """Get user by ID from cache."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def has_user(self, user_id: UUID) -> bool:
        """Check if user exists by ID."""
        return user_id in self._users

    def is_identity_taken(self, *identifiers: str) -> bool:
        """Check if any identifier is already some user's name or email.

        Names and emails share one namespace because login accepts either.
        """
        return any(self.find_by_login_or_email(identifier) is not None for identifier in identifiers)

    def find_by_login_or_email(self, identifier: str) -> User | None:
        """Find user whose name or email matches the identifier, ignoring case."""
        key = identifier.strip().casefold()
        if not key:
            return None
        return next(
            (u for u in self._users.values() if u.name.casefold() == key or u.email.casefold() == key),
            None,
        )

    def verify_password(self, user: User, password: str) -> bool:
        """Verify password against the user's stored hash."""
        return check_password(password, user.password_hash)

    async def create_user(self, name: str, email: str, password: str, is_admin: bool = False) -> User:
        """Create user with hashed password."""
        name = validate_name(name)
        email = validate_email(email)
        validate_password(password)

        if self.is_identity_taken(name, email):
            raise DuplicateIdentityError

        password_hash = hash_password(password, self.core.config.bcrypt_rounds)
        user = User(name=name, email=email, password_hash=password_hash, is_admin=is_admin)
        try:
            res = await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError:
            # Lost a race against a concurrent registration
            raise DuplicateIdentityError from None
        return await self.update_user_cache(res.inserted_id)

    async def update_all_users_cache(self) -> None:
        """Reload all users cache from database."""
        users = await User.list_cursor(self._collection.find())
        self._users = {user.id: user for user in users}

    async def update_user_cache(self, user_id: UUID) -> User:
        """Reload a specific user cache from database."""
        user = await self._collection.find_one({"_id": user_id})
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        self._users[user_id] = User.model_validate(user)
        return self._users[user_id]

    async def on_start(self) -> None:
        """Initialize indexes and cache."""
        # Strength 2 collation makes the unique indexes case-insensitive
        await self._collection.create_index([("name", 1)], unique=True, collation=CASE_INSENSITIVE)
        await self._collection.create_index([("email", 1)], unique=True, collation=CASE_INSENSITIVE)
        await self.update_all_users_cache()
        logger.debug("user_service_started", user_count=len(self._users))
