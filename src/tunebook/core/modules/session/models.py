"""Session management models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import Field

from tunebook.core.db import MongoModel
from tunebook.utils import now

SessionId = NewType("SessionId", str)


class Session(MongoModel):
    """Server-side login session.

    Indexed on session_id - unique, user_id, created_at (TTL from config).
    """

    session_id: str
    logged_in: bool = False
    user_id: UUID
    token: str  # Bearer token issued together with this session
    created_at: datetime = Field(default_factory=now)
