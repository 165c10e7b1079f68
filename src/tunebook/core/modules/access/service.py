import structlog

from tunebook.core.core import Service
from tunebook.core.modules.access.models import Credentials
from tunebook.core.modules.user.models import User
from tunebook.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class AccessService(Service):
    """Session guard: admits a request only when it carries a logged-in session."""

    async def ensure_authenticated(self, credentials: Credentials) -> User:
        """Resolve the authenticated user or raise AuthenticationError."""
        users = self.core.services.user
        if credentials.session_id:
            session = await self.core.services.session.get_session(credentials.session_id)
            if session is not None and session.logged_in is True and users.has_user(session.user_id):
                return users.get_user(session.user_id)

        # Stateless path, off unless configured
        if credentials.bearer_token and self.core.config.accept_bearer_tokens:
            user_id = self.core.services.token.verify_token(credentials.bearer_token)
            if users.has_user(user_id):
                return users.get_user(user_id)

        logger.debug(
            "unauthenticated_request",
            has_session=credentials.session_id is not None,
            has_token=credentials.bearer_token is not None,
        )
        raise AuthenticationError
