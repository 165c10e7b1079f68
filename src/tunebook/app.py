from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pymongo import AsyncMongoClient

from tunebook import __version__
from tunebook.config import Config
from tunebook.core.core import Core
from tunebook.core.modules.access.models import Credentials
from tunebook.core.modules.auth.models import AuthResult
from tunebook.core.modules.playlist.models import Playlist
from tunebook.core.modules.session.models import SessionId
from tunebook.core.modules.song.models import Song
from tunebook.core.modules.user.models import User, UserView


class App:
    """Facade for all application operations.

    Protected operations take the user resolved by `authenticate`; the web
    layer calls it in a dependency so unauthenticated requests are rejected
    before any input is looked at.
    """

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, mongo_client)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def authenticate(self, credentials: Credentials) -> User:
        """Resolve the logged-in user, raising AuthenticationError otherwise."""
        return await self._core.services.access.ensure_authenticated(credentials)

    async def register(
        self, name: str, email: str, password: str, previous_session_id: SessionId | None = None
    ) -> AuthResult:
        """Create an account and log it in."""
        return await self._core.services.auth.register(name, email, password, previous_session_id)

    async def login(self, login: str, password: str, previous_session_id: SessionId | None = None) -> AuthResult:
        """Authenticate by name or email and create a session."""
        return await self._core.services.auth.login(login, password, previous_session_id)

    async def logout(self, session_id: SessionId | None) -> None:
        """End the session, if any."""
        await self._core.services.auth.logout(session_id)

    def get_profile(self, current_user: User) -> UserView:
        return UserView.from_domain(current_user)

    # === Playlists ===
    async def get_playlists(self, current_user: User) -> list[Playlist]:
        """List the current user's playlists, newest first."""
        return await self._core.services.playlist.list_owned(current_user.id)

    async def get_playlist(self, current_user: User, playlist_id: UUID) -> Playlist:
        return await self._core.services.playlist.get_owned(current_user.id, playlist_id)

    async def create_playlist(self, current_user: User, fields: dict[str, Any]) -> Playlist:
        """Create a playlist owned by the current user."""
        return await self._core.services.playlist.create_owned(current_user.id, fields)

    async def update_playlist(self, current_user: User, playlist_id: UUID, fields: dict[str, Any]) -> Playlist:
        """Update playlist fields (partial update, owner only)."""
        return await self._core.services.playlist.update_owned(current_user.id, playlist_id, fields)

    async def delete_playlist(self, current_user: User, playlist_id: UUID) -> None:
        await self._core.services.playlist.delete_owned(current_user.id, playlist_id)

    async def add_song_to_playlist(self, current_user: User, playlist_id: UUID, song_id: UUID) -> Playlist:
        return await self._core.services.playlist.add_song(current_user.id, playlist_id, song_id)

    async def remove_song_from_playlist(self, current_user: User, playlist_id: UUID, song_id: UUID) -> Playlist:
        return await self._core.services.playlist.remove_song(current_user.id, playlist_id, song_id)

    # === Songs ===
    async def get_songs(self, current_user: User) -> list[Song]:
        """List the current user's songs, newest first."""
        return await self._core.services.song.list_owned(current_user.id)

    async def get_song(self, current_user: User, song_id: UUID) -> Song:
        return await self._core.services.song.get_owned(current_user.id, song_id)

    async def create_song(self, current_user: User, fields: dict[str, Any]) -> Song:
        return await self._core.services.song.create_owned(current_user.id, fields)

    async def update_song(self, current_user: User, song_id: UUID, fields: dict[str, Any]) -> Song:
        """Update song fields (partial update, owner only)."""
        return await self._core.services.song.update_owned(current_user.id, song_id, fields)

    async def delete_song(self, current_user: User, song_id: UUID) -> None:
        """Delete a song and drop it from the owner's playlists."""
        await self._core.services.song.delete_owned(current_user.id, song_id)
        await self._core.services.playlist.remove_song_everywhere(current_user.id, song_id)

    # === Metadata ===
    def get_version(self) -> dict[str, str]:
        """Get version and build information."""
        return {
            "version": __version__,
            "git_commit_hash": self.config.git_commit_hash,
            "build_time": self.config.build_time,
        }
