from uuid import UUID

from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from tunebook.app import App
from tunebook.core.db import CamelModel
from tunebook.core.modules.auth.models import AuthResult
from tunebook.core.modules.user.models import UserView
from tunebook.web.deps import SESSION_COOKIE, AppDep, AuthDep, SessionIdDep
from tunebook.web.openapi import ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    """Account registration request."""

    name: str = Field(..., description="Display name, unique (case-insensitive)")
    email: str = Field(..., description="Email address, unique (case-insensitive)")
    password: str = Field(..., description="Plaintext password, hashed before storage")

    model_config = {"json_schema_extra": {"examples": [{"name": "alice", "email": "a@x.com", "password": "secret1"}]}}


class RegisterResponse(CamelModel):
    """Registered user with the issued bearer token."""

    uid: UUID
    name: str
    email: str
    is_admin: bool
    auth: bool = True
    token: str = Field(..., description="Signed bearer token, valid for 24 hours")


class LoginRequest(BaseModel):
    """Authentication request."""

    login: str = Field(..., description="Name or email (case-insensitive)")
    password: str = Field(..., description="Password for authentication")


class LoginResponse(CamelModel):
    """Authentication response."""

    auth: bool = True
    user_id: UUID
    session_id: str = Field(..., description="Opaque session id, also set as the session cookie")
    token: str = Field(..., description="Signed bearer token, valid for 24 hours")
    user: UserView


class LogoutResponse(BaseModel):
    auth: bool = False


def _set_session_cookie(response: Response, app: App, result: AuthResult) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=result.session.session_id,
        httponly=True,
        samesite="lax",
        secure=app.config.cookie_secure,
        max_age=app.config.session_ttl_seconds,
    )


@router.post(
    "/register",
    summary="Register",
    description="Create an account and log it in. Sets the session cookie and returns a bearer token.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created and logged in"},
        400: {"model": ErrorResponse, "description": "Invalid input, or name/email already taken"},
    },
)
async def register(req: RegisterRequest, app: AppDep, session_id: SessionIdDep, response: Response) -> RegisterResponse:
    result = await app.register(req.name, req.email, req.password, session_id)
    _set_session_cookie(response, app, result)
    user = UserView.from_domain(result.user)
    return RegisterResponse(uid=user.uid, name=user.name, email=user.email, is_admin=user.is_admin, token=result.token)


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with name or email and password. Sets the session cookie and returns a bearer token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(req: LoginRequest, app: AppDep, session_id: SessionIdDep, response: Response) -> LoginResponse:
    result = await app.login(req.login, req.password, session_id)
    _set_session_cookie(response, app, result)
    return LoginResponse(
        user_id=result.user.id,
        session_id=result.session.session_id,
        token=result.token,
        user=UserView.from_domain(result.user),
    )


@router.get(
    "/logout",
    summary="End session",
    description="Destroy the current session. Always reports the client as logged out.",
    operation_id="logout",
    responses={200: {"description": "Logged out"}},
)
async def logout(app: AppDep, session_id: SessionIdDep, response: Response) -> LogoutResponse:
    await app.logout(session_id)
    response.delete_cookie(SESSION_COOKIE)
    return LogoutResponse()


@router.get(
    "/me",
    summary="Get current user",
    description="Get the profile of the currently authenticated user.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def me(app: AppDep, current_user: AuthDep) -> UserView:
    return app.get_profile(current_user)
