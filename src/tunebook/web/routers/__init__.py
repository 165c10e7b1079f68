from tunebook.web.routers.auth import router as auth_router
from tunebook.web.routers.metadata import router as metadata_router
from tunebook.web.routers.playlists import router as playlists_router
from tunebook.web.routers.songs import router as songs_router

__all__ = [
    "auth_router",
    "metadata_router",
    "playlists_router",
    "songs_router",
]
