from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from tunebook.config import Config

if TYPE_CHECKING:
    from tunebook.core.modules.access.service import AccessService
    from tunebook.core.modules.auth.service import AuthService
    from tunebook.core.modules.playlist.service import PlaylistService
    from tunebook.core.modules.session.service import SessionService
    from tunebook.core.modules.song.service import SongService
    from tunebook.core.modules.token.service import TokenService
    from tunebook.core.modules.user.service import UserService

logger = structlog.get_logger(__name__)

# (attribute, "module:Class"), in start order. Users load first: auth and access read the cache.
SERVICE_REGISTRY = (
    ("user", "tunebook.core.modules.user.service:UserService"),
    ("session", "tunebook.core.modules.session.service:SessionService"),
    ("token", "tunebook.core.modules.token.service:TokenService"),
    ("auth", "tunebook.core.modules.auth.service:AuthService"),
    ("access", "tunebook.core.modules.access.service:AccessService"),
    ("song", "tunebook.core.modules.song.service:SongService"),
    ("playlist", "tunebook.core.modules.playlist.service:PlaylistService"),
)


class Service:
    """Base class for services. Each gets the database and, once wired, the Core."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Create indexes, warm caches."""

    async def on_stop(self) -> None:
        pass

    @property
    def core(self) -> Core:
        if self._core is None:
            raise RuntimeError(f"{type(self).__name__} is not attached to a Core")
        return self._core

    def set_core(self, core: Core) -> None:
        self._core = core


def _load_service_class(target: str) -> type[Service]:
    module_path, class_name = target.split(":")
    return cast(type[Service], getattr(importlib.import_module(module_path), class_name))


class Services:
    """All service instances, built from SERVICE_REGISTRY."""

    user: UserService
    session: SessionService
    token: TokenService
    auth: AuthService
    access: AccessService
    song: SongService
    playlist: PlaylistService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._services: list[Service] = []
        for attr_name, target in SERVICE_REGISTRY:
            service = _load_service_class(target)(database)
            setattr(self, attr_name, service)
            self._services.append(service)

    def set_core(self, core: Core) -> None:
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()
        logger.debug("services_started", count=len(self._services))

    async def stop_all(self) -> None:
        """Stop services in reverse start order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances.

    A Mongo client may be passed in (tests inject an in-memory one); otherwise
    one is created from `config.database_url`, whose path names the database.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self.config = config
        database_name = urlparse(config.database_url).path.lstrip("/")
        if not database_name:
            raise ValueError(f"Database name missing from database_url: {config.database_url!r}")
        if mongo_client is None:
            mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
        self.mongo_client = mongo_client
        self.database = self.mongo_client.get_database(database_name)
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        await self.services.start_all()
        try:
            yield
        finally:
            await self.services.stop_all()
            await self.mongo_client.aclose()
