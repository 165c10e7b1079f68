from datetime import datetime
from uuid import UUID

from pydantic import Field

from tunebook.core.db import CamelModel, MongoModel
from tunebook.utils import now


class User(MongoModel):
    """User domain model with credentials."""

    name: str
    email: str
    password_hash: str  # bcrypt hash, never serialized to clients
    is_admin: bool = False
    created_at: datetime = Field(default_factory=now)


class UserView(CamelModel):
    """User account information (API representation)."""

    uid: UUID = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    is_admin: bool = Field(..., description="Administrative flag")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(uid=user.id, name=user.name, email=user.email, is_admin=user.is_admin)
