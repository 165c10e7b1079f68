from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from tunebook import __version__
from tunebook.app import App
from tunebook.config import Config
from tunebook.errors import UserError
from tunebook.web.error_handlers import general_exception_handler, request_validation_error_handler, user_error_handler
from tunebook.web.openapi import set_custom_openapi
from tunebook.web.routers import auth_router, metadata_router, playlists_router, songs_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Tunebook API", version=__version__, lifespan=lifespan)

    # Browser clients send the session cookie cross-origin during development
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    async def index() -> dict[str, str]:
        return {"message": "Tunebook API", "version": __version__, "status": "running"}

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(playlists_router)
    app.include_router(songs_router)
    app.include_router(metadata_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
