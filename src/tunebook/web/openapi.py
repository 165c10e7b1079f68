from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from tunebook import __version__

SECURITY_SCHEMES = {
    "SessionCookie": {
        "type": "apiKey",
        "in": "cookie",
        "name": "session_id",
        "description": "Opaque session id set by /auth/login and /auth/register",
    },
    "BearerAuth": {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": "Token returned by /auth/login; admitted only when TUNEBOOK_ACCEPT_BEARER_TOKENS is set",
    },
}

# Operations reachable without a logged-in session
PUBLIC_OPERATIONS = frozenset(
    {
        ("post", "/auth/register"),
        ("post", "/auth/login"),
        ("get", "/auth/logout"),
        ("get", "/health"),
        ("get", "/"),
    }
)


def set_custom_openapi(app: FastAPI) -> None:
    """Document the session cookie and bearer schemes, marking public operations."""

    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = get_openapi(
            title=app.title, version=__version__, summary="Songs and playlists for musicians", routes=app.routes
        )
        schema.setdefault("components", {})["securitySchemes"] = SECURITY_SCHEMES
        schema["security"] = [{name: []} for name in SECURITY_SCHEMES]
        for path, operations in schema.get("paths", {}).items():
            for method, operation in operations.items():
                if (method, path) in PUBLIC_OPERATIONS:
                    operation["security"] = []

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid username/email or password", "type": "invalid_credentials"},
                {"message": "Playlist not found", "type": "not_found"},
                {"message": "Forbidden", "type": "access_denied"},
            ]
        }
    }
