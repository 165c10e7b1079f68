from datetime import datetime
from uuid import UUID

from pydantic import Field

from tunebook.core.db import MongoModel
from tunebook.utils import now

# Fields set by the server; client input never reaches them
PROTECTED_FIELDS = frozenset({"id", "owner_id", "created_at", "updated_at"})


class OwnedModel(MongoModel):
    """Document that belongs to exactly one user."""

    owner_id: UUID  # Stamped at creation, immutable afterwards
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
