from datetime import datetime
from uuid import UUID

from fastapi import APIRouter
from pydantic import Field

from tunebook.core.db import CamelModel
from tunebook.core.modules.song.models import Difficulty, Song
from tunebook.web.deps import AppDep, AuthDep
from tunebook.web.openapi import ErrorResponse

router = APIRouter(prefix="/songs", tags=["songs"])

NOT_AUTHENTICATED = {"model": ErrorResponse, "description": "Not authenticated"}
NOT_OWNER = {"model": ErrorResponse, "description": "Song belongs to another user"}
NOT_FOUND = {"model": ErrorResponse, "description": "Song not found"}


class SongFields(CamelModel):
    artist: str | None = None
    album: str | None = None
    bpm: int | None = Field(None, ge=1, description="Tempo in beats per minute")
    key: str | None = None
    chords: str | None = None
    tabs: str | None = None
    instrument: list[str] | None = None
    tuning: str | None = None
    technique: list[str] | None = None
    instrument_difficulty: dict[str, Difficulty] | None = Field(None, description="Instrument to difficulty (1-5)")
    last_played: datetime | None = None


class CreateSongRequest(SongFields):
    """Request to create a song. The owner is always the current user."""

    title: str = Field(..., description="Song title")

    model_config = {
        "json_schema_extra": {"examples": [{"title": "Blackbird", "artist": "The Beatles", "bpm": 94, "key": "G"}]}
    }


class UpdateSongRequest(SongFields):
    """Partial song update: omitted fields keep their values."""

    title: str | None = None


@router.get(
    "",
    summary="List songs",
    description="Get the current user's songs, newest first.",
    operation_id="listSongs",
    responses={200: {"description": "List of songs"}, 401: NOT_AUTHENTICATED},
)
async def list_songs(app: AppDep, current_user: AuthDep) -> list[Song]:
    return await app.get_songs(current_user)


@router.post(
    "",
    summary="Create song",
    operation_id="createSong",
    status_code=201,
    responses={
        201: {"description": "Song created"},
        400: {"model": ErrorResponse, "description": "Title missing or invalid data"},
        401: NOT_AUTHENTICATED,
    },
)
async def create_song(req: CreateSongRequest, app: AppDep, current_user: AuthDep) -> Song:
    fields = {key: value for key, value in req.model_dump(exclude_unset=True).items() if value is not None}
    return await app.create_song(current_user, fields)


@router.get(
    "/{uid}",
    summary="Get song",
    operation_id="getSong",
    responses={200: {"description": "Song"}, 401: NOT_AUTHENTICATED, 403: NOT_OWNER, 404: NOT_FOUND},
)
async def get_song(uid: UUID, app: AppDep, current_user: AuthDep) -> Song:
    return await app.get_song(current_user, uid)


@router.put(
    "/{uid}",
    summary="Update song",
    description="Update the given fields of a song; fields left out are unchanged.",
    operation_id="updateSong",
    responses={
        200: {"description": "Updated song"},
        400: {"model": ErrorResponse, "description": "Invalid data"},
        401: NOT_AUTHENTICATED,
        403: NOT_OWNER,
        404: NOT_FOUND,
    },
)
async def update_song(uid: UUID, req: UpdateSongRequest, app: AppDep, current_user: AuthDep) -> Song:
    return await app.update_song(current_user, uid, req.model_dump(exclude_unset=True))


@router.delete(
    "/{uid}",
    summary="Delete song",
    description="Delete a song and remove it from the owner's playlists.",
    operation_id="deleteSong",
    status_code=204,
    responses={204: {"description": "Song deleted"}, 401: NOT_AUTHENTICATED, 403: NOT_OWNER, 404: NOT_FOUND},
)
async def delete_song(uid: UUID, app: AppDep, current_user: AuthDep) -> None:
    await app.delete_song(current_user, uid)
