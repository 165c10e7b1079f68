from datetime import datetime
from typing import Annotated

from pydantic import Field

from tunebook.core.modules.owned.models import OwnedModel

Difficulty = Annotated[int, Field(ge=1, le=5)]


class Song(OwnedModel):
    """A song in a user's repertoire."""

    title: str
    artist: str | None = None
    album: str | None = None
    bpm: int | None = Field(None, ge=1)
    key: str | None = None
    chords: str | None = None
    tabs: str | None = None
    instrument: list[str] = Field(default_factory=list)
    tuning: str | None = None
    technique: list[str] = Field(default_factory=list)
    instrument_difficulty: dict[str, Difficulty] = Field(default_factory=dict)  # instrument -> 1..5
    last_played: datetime | None = None
