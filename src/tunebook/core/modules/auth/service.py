import secrets

import structlog

from tunebook.core.core import Service
from tunebook.core.modules.auth.models import AuthResult
from tunebook.core.modules.session.models import SessionId
from tunebook.core.modules.user.models import User
from tunebook.core.modules.user.service import check_password, hash_password
from tunebook.errors import InvalidCredentialsError

logger = structlog.get_logger(__name__)


class AuthService(Service):
    """Establishes identity: verifies credentials, then issues a session and a bearer token."""

    _dummy_hash: str = ""

    async def on_start(self) -> None:
        # Checked against on unknown logins so both failure paths run bcrypt
        self._dummy_hash = hash_password(secrets.token_urlsafe(16), self.core.config.bcrypt_rounds)

    async def register(
        self, name: str, email: str, password: str, previous_session_id: SessionId | None = None
    ) -> AuthResult:
        """Create a user account and log it in."""
        logger.info("registering_user", email=email)
        user = await self.core.services.user.create_user(name, email, password)
        logger.info("user_registered", user_id=str(user.id))
        return await self._issue(user, previous_session_id)

    async def login(self, login: str, password: str, previous_session_id: SessionId | None = None) -> AuthResult:
        """Authenticate by name or email.

        Unknown identifier and wrong password raise the same InvalidCredentialsError.
        """
        users = self.core.services.user
        user = users.find_by_login_or_email(login)
        if user is None:
            check_password(password, self._dummy_hash)
            logger.info("login_failed")
            raise InvalidCredentialsError
        if not users.verify_password(user, password):
            logger.info("login_failed")
            raise InvalidCredentialsError

        logger.info("login_succeeded", user_id=str(user.id))
        return await self._issue(user, previous_session_id)

    async def logout(self, session_id: SessionId | None) -> None:
        """Destroy the session. Never raises: the client is logged out either way."""
        if not session_id:
            return
        try:
            await self.core.services.session.destroy_session(session_id)
        except Exception:
            logger.exception("session_destroy_failed")

    async def _issue(self, user: User, previous_session_id: SessionId | None) -> AuthResult:
        # Drop the session the client came in with so its id cannot be reused
        if previous_session_id:
            await self.core.services.session.destroy_session(previous_session_id)
        token = self.core.services.token.issue_token(user.id)
        session = await self.core.services.session.create_session(user.id, token)
        return AuthResult(user=user, session=session, token=token)
