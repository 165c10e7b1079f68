from pydantic import BaseModel

from tunebook.core.modules.session.models import Session
from tunebook.core.modules.user.models import User


class AuthResult(BaseModel):
    """Identity issued on successful register or login."""

    user: User
    session: Session
    token: str
