from typing import NamedTuple

from tunebook.core.modules.session.models import SessionId


class Credentials(NamedTuple):
    """What a request presented to prove identity."""

    session_id: SessionId | None = None
    bearer_token: str | None = None
