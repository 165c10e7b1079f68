from uuid import UUID

from fastapi import APIRouter
from pydantic import AliasChoices, Field

from tunebook.core.db import CamelModel
from tunebook.core.modules.playlist.models import Playlist
from tunebook.web.deps import AppDep, AuthDep
from tunebook.web.openapi import ErrorResponse

router = APIRouter(prefix="/playlists", tags=["playlists"])

NOT_AUTHENTICATED = {"model": ErrorResponse, "description": "Not authenticated"}
NOT_OWNER = {"model": ErrorResponse, "description": "Playlist belongs to another user"}
NOT_FOUND = {"model": ErrorResponse, "description": "Playlist not found"}

# Web clients send the membership list as `songUids`
SONG_IDS_ALIASES = AliasChoices("songIds", "songUids", "song_ids")


class CreatePlaylistRequest(CamelModel):
    """Request to create a playlist. The owner is always the current user."""

    name: str = Field(..., description="Playlist name")
    description: str | None = Field(None, description="Free-text description")
    song_ids: list[UUID] = Field(
        default_factory=list, validation_alias=SONG_IDS_ALIASES, description="Initial song ids (duplicates collapse)"
    )

    model_config = {"json_schema_extra": {"examples": [{"name": "Gig Set", "description": "Friday night"}]}}


class UpdatePlaylistRequest(CamelModel):
    """Partial playlist update: omitted fields keep their values."""

    name: str | None = Field(None, description="New name")
    description: str | None = Field(None, description="New description")
    song_ids: list[UUID] | None = Field(None, validation_alias=SONG_IDS_ALIASES, description="Replacement song id list")


@router.get(
    "",
    summary="List playlists",
    description="Get the current user's playlists, newest first.",
    operation_id="listPlaylists",
    responses={200: {"description": "List of playlists"}, 401: NOT_AUTHENTICATED},
)
async def list_playlists(app: AppDep, current_user: AuthDep) -> list[Playlist]:
    return await app.get_playlists(current_user)


@router.post(
    "",
    summary="Create playlist",
    operation_id="createPlaylist",
    status_code=201,
    responses={
        201: {"description": "Playlist created"},
        400: {"model": ErrorResponse, "description": "Name missing or invalid data"},
        401: NOT_AUTHENTICATED,
    },
)
async def create_playlist(req: CreatePlaylistRequest, app: AppDep, current_user: AuthDep) -> Playlist:
    return await app.create_playlist(current_user, req.model_dump(exclude_unset=True))


@router.get(
    "/{uid}",
    summary="Get playlist",
    operation_id="getPlaylist",
    responses={200: {"description": "Playlist"}, 401: NOT_AUTHENTICATED, 403: NOT_OWNER, 404: NOT_FOUND},
)
async def get_playlist(uid: UUID, app: AppDep, current_user: AuthDep) -> Playlist:
    return await app.get_playlist(current_user, uid)


@router.put(
    "/{uid}",
    summary="Update playlist",
    description="Update the given fields of a playlist; fields left out are unchanged.",
    operation_id="updatePlaylist",
    responses={
        200: {"description": "Updated playlist"},
        400: {"model": ErrorResponse, "description": "Invalid data"},
        401: NOT_AUTHENTICATED,
        403: NOT_OWNER,
        404: NOT_FOUND,
    },
)
async def update_playlist(uid: UUID, req: UpdatePlaylistRequest, app: AppDep, current_user: AuthDep) -> Playlist:
    return await app.update_playlist(current_user, uid, req.model_dump(exclude_unset=True))


@router.delete(
    "/{uid}",
    summary="Delete playlist",
    operation_id="deletePlaylist",
    status_code=204,
    responses={204: {"description": "Playlist deleted"}, 401: NOT_AUTHENTICATED, 403: NOT_OWNER, 404: NOT_FOUND},
)
async def delete_playlist(uid: UUID, app: AppDep, current_user: AuthDep) -> None:
    await app.delete_playlist(current_user, uid)


@router.post(
    "/{uid}/songs/{song_uid}",
    summary="Add song to playlist",
    description="Add a song id to the playlist. Adding a song that is already there is a no-op.",
    operation_id="addSongToPlaylist",
    responses={200: {"description": "Updated playlist"}, 401: NOT_AUTHENTICATED, 403: NOT_OWNER, 404: NOT_FOUND},
)
async def add_song(uid: UUID, song_uid: UUID, app: AppDep, current_user: AuthDep) -> Playlist:
    return await app.add_song_to_playlist(current_user, uid, song_uid)


@router.delete(
    "/{uid}/songs/{song_uid}",
    summary="Remove song from playlist",
    description="Remove a song id from the playlist. Removing a song that is not there is a no-op.",
    operation_id="removeSongFromPlaylist",
    responses={200: {"description": "Updated playlist"}, 401: NOT_AUTHENTICATED, 403: NOT_OWNER, 404: NOT_FOUND},
)
async def remove_song(uid: UUID, song_uid: UUID, app: AppDep, current_user: AuthDep) -> Playlist:
    return await app.remove_song_from_playlist(current_user, uid, song_uid)
