from typing import ClassVar

from tunebook.core.modules.owned.service import OwnedResourceService
from tunebook.core.modules.song.models import Song


class SongService(OwnedResourceService[Song]):
    """Songs, scoped to their owner."""

    collection_name: ClassVar[str] = "songs"
    model = Song
    label: ClassVar[str] = "Song"
    required_field: ClassVar[str] = "title"
