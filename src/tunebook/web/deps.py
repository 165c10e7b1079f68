from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from tunebook.app import App
from tunebook.core.modules.access.models import Credentials
from tunebook.core.modules.session.models import SessionId
from tunebook.core.modules.user.models import User

SESSION_COOKIE = "session_id"

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_id(
    session_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> SessionId | None:
    """Session id from the session cookie, if the client sent one."""
    return SessionId(session_cookie) if session_cookie else None


async def get_credentials(
    session_id: Annotated[SessionId | None, Depends(get_session_id)] = None,
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> Credentials:
    """Collect the session cookie and bearer token; the session guard decides what they are worth."""
    bearer_token = bearer.credentials if bearer and bearer.scheme.lower() == "bearer" else None
    return Credentials(session_id=session_id, bearer_token=bearer_token)


async def require_user(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[Credentials, Depends(get_credentials)],
) -> User:
    """Session guard for protected routes.

    FastAPI resolves dependencies before it validates path and body
    parameters, so a request without a logged-in session gets a 401 whatever
    its input looks like.
    """
    return await app.authenticate(credentials)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionIdDep = Annotated[SessionId | None, Depends(get_session_id)]
AuthDep = Annotated[User, Depends(require_user)]
