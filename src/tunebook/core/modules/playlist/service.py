from typing import ClassVar
from uuid import UUID

import structlog

from tunebook.core.modules.owned.service import OwnedResourceService
from tunebook.core.modules.playlist.models import Playlist
from tunebook.utils import now

logger = structlog.get_logger(__name__)


class PlaylistService(OwnedResourceService[Playlist]):
    """Playlists, scoped to their owner, with inline song membership."""

    collection_name: ClassVar[str] = "playlists"
    model = Playlist
    label: ClassVar[str] = "Playlist"
    required_field: ClassVar[str] = "name"

    async def on_start(self) -> None:
        await super().on_start()
        await self._collection.create_index([("song_ids", 1)])

    async def add_song(self, user_id: UUID, playlist_id: UUID, song_id: UUID) -> Playlist:
        """Add a song to the playlist. Adding a present song changes nothing."""
        playlist = await self.get_owned(user_id, playlist_id)
        if song_id in playlist.song_ids:
            return playlist
        return await self._find_and_update(
            user_id, playlist_id, {"$addToSet": {"song_ids": song_id}, "$set": {"updated_at": now()}}
        )

    async def remove_song(self, user_id: UUID, playlist_id: UUID, song_id: UUID) -> Playlist:
        """Remove a song from the playlist. Removing an absent song changes nothing."""
        playlist = await self.get_owned(user_id, playlist_id)
        if song_id not in playlist.song_ids:
            return playlist
        return await self._find_and_update(
            user_id, playlist_id, {"$pull": {"song_ids": song_id}, "$set": {"updated_at": now()}}
        )

    async def remove_song_everywhere(self, user_id: UUID, song_id: UUID) -> int:
        """Drop a song from all of the user's playlists and return how many changed."""
        result = await self._collection.update_many(
            {"owner_id": user_id, "song_ids": song_id}, {"$pull": {"song_ids": song_id}, "$set": {"updated_at": now()}}
        )
        if result.modified_count:
            logger.debug("song_removed_from_playlists", song_id=str(song_id), count=result.modified_count)
        return result.modified_count
