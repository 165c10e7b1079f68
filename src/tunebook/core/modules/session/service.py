import secrets
from datetime import UTC, timedelta
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from tunebook.core.core import Service
from tunebook.core.modules.session.models import Session, SessionId
from tunebook.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Store of server-side sessions keyed by an opaque session id."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("session_id", 1)], unique=True)
        await self._collection.create_index([("user_id", 1)])
        # TTL index for automatic session cleanup
        await self._collection.create_index([("created_at", 1)], expireAfterSeconds=self.core.config.session_ttl_seconds)

    async def create_session(self, user_id: UUID, token: str) -> Session:
        """Create a logged-in session for the user."""
        session = Session(session_id=secrets.token_urlsafe(32), logged_in=True, user_id=user_id, token=token)
        await self._collection.insert_one(session.to_mongo())
        return session

    async def get_session(self, session_id: SessionId) -> Session | None:
        """Get a live session, or None if it does not exist or has expired."""
        doc = await self._collection.find_one({"session_id": session_id})
        if doc is None:
            return None
        session = Session.model_validate(doc)
        # The TTL monitor only runs periodically, so expired records may linger
        if self.is_expired(session):
            return None
        return session

    def is_expired(self, session: Session) -> bool:
        created_at = session.created_at
        if created_at.tzinfo is None:  # Clients without tz_aware return naive UTC
            created_at = created_at.replace(tzinfo=UTC)
        return now() - created_at >= timedelta(seconds=self.core.config.session_ttl_seconds)

    async def destroy_session(self, session_id: SessionId) -> None:
        """Remove a session from the store."""
        await self._collection.delete_one({"session_id": session_id})
