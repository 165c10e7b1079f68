from uuid import UUID

from pydantic import Field, field_validator

from tunebook.core.modules.owned.models import OwnedModel


class Playlist(OwnedModel):
    """Ordered set of song ids belonging to one user."""

    name: str
    description: str | None = None
    song_ids: list[UUID] = Field(default_factory=list)

    @field_validator("song_ids")
    @classmethod
    def _unique_song_ids(cls, value: list[UUID]) -> list[UUID]:
        return list(dict.fromkeys(value))
