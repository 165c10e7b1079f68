"""Tests for bearer token issue and verification."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from tunebook.core.core import Core
from tunebook.errors import AuthenticationError
from tunebook.utils import now


class TestTokenService:
    @pytest.fixture(autouse=True)
    def setup(self, core: Core):
        self.tokens = core.services.token
        self.config = core.config

    def _encode(self, payload: dict, secret: str | None = None) -> str:
        return jwt.encode(payload, secret or self.config.jwt_secret, algorithm="HS256")

    @pytest.mark.asyncio
    async def test_round_trip_returns_user_id(self):
        user_id = uuid4()
        assert self.tokens.verify_token(self.tokens.issue_token(user_id)) == user_id

    @pytest.mark.asyncio
    async def test_token_expires_after_24_hours(self):
        token = self.tokens.issue_token(uuid4())
        payload = jwt.decode(token, self.config.jwt_secret, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60
        assert payload["type"] == "access"

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self):
        issued = now() - timedelta(hours=25)
        token = self._encode({"sub": str(uuid4()), "type": "access", "iat": issued, "exp": issued + timedelta(hours=24)})
        with pytest.raises(AuthenticationError, match="expired"):
            self.tokens.verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_secret_rejected(self):
        token = self._encode({"sub": str(uuid4()), "type": "access", "exp": now() + timedelta(hours=1)}, "other-secret")
        with pytest.raises(AuthenticationError, match="Invalid token"):
            self.tokens.verify_token(token)

    @pytest.mark.asyncio
    async def test_non_access_token_rejected(self):
        token = self._encode({"sub": str(uuid4()), "type": "refresh", "exp": now() + timedelta(hours=1)})
        with pytest.raises(AuthenticationError):
            self.tokens.verify_token(token)

    @pytest.mark.asyncio
    async def test_malformed_subject_rejected(self):
        token = self._encode({"sub": "not-a-uuid", "type": "access", "exp": now() + timedelta(hours=1)})
        with pytest.raises(AuthenticationError):
            self.tokens.verify_token(token)

    @pytest.mark.asyncio
    async def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            self.tokens.verify_token("not.a.jwt")
