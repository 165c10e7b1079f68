"""Bearer token creation and verification.

Tokens are HS256 JWTs carrying the user id in `sub` and expiring
`token_expire_hours` after issuance. They are stateless: validity depends
only on signature and expiry, not on any session record.
"""

from datetime import timedelta
from uuid import UUID

import jwt

from tunebook.core.core import Service
from tunebook.errors import AuthenticationError
from tunebook.utils import now


class TokenService(Service):
    """Issues and verifies signed bearer tokens with the configured secret."""

    def issue_token(self, user_id: UUID) -> str:
        """Create a signed access token for the user."""
        config = self.core.config
        issued_at = now()
        payload = {
            "sub": str(user_id),
            "type": "access",
            "iat": issued_at,
            "exp": issued_at + timedelta(hours=config.token_expire_hours),
        }
        return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)

    def verify_token(self, token: str) -> UUID:
        """Verify a token and return the user id it was issued for.

        Raises AuthenticationError on a bad signature, expiry, or malformed payload.
        """
        config = self.core.config
        try:
            payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm], options={"require": ["exp", "sub"]})
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired") from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token") from None

        if payload.get("type") != "access":
            raise AuthenticationError("Invalid token")
        try:
            return UUID(payload["sub"])
        except ValueError:
            raise AuthenticationError("Invalid token") from None
