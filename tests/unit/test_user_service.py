"""Tests for the credential store."""

import pytest
import pytest_asyncio

from tunebook.core.core import Core
from tunebook.core.modules.user.models import User, UserView
from tunebook.errors import DuplicateIdentityError, ValidationError


class TestCreateUser:
    """Tests for user creation."""

    @pytest.mark.asyncio
    async def test_password_is_stored_as_bcrypt_hash(self, core: Core, mongo_client):
        user = await core.services.user.create_user("alice", "a@x.com", "secret1")

        stored = mongo_client.get_database("tunebook_test").get_collection("users").docs
        assert len(stored) == 1
        assert stored[0]["password_hash"].startswith("$2b$04$")
        assert "secret1" not in str(stored[0])
        assert user.password_hash != "secret1"

    @pytest.mark.asyncio
    async def test_same_password_gets_different_salt(self, core: Core):
        alice = await core.services.user.create_user("alice", "a@x.com", "secret1")
        bob = await core.services.user.create_user("bob", "b@x.com", "secret1")
        assert alice.password_hash != bob.password_hash

    @pytest.mark.asyncio
    async def test_new_user_is_not_admin(self, core: Core):
        user = await core.services.user.create_user("alice", "a@x.com", "secret1")
        assert user.is_admin is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("name", "email"),
        [("ALICE", "other@x.com"), ("other", "A@X.COM"), ("a@x.com", "other@x.com"), ("A@X.com", "b@x.com")],
    )
    async def test_duplicate_name_or_email_rejected(self, core: Core, name: str, email: str):
        await core.services.user.create_user("alice", "a@x.com", "secret1")
        with pytest.raises(DuplicateIdentityError):
            await core.services.user.create_user(name, email, "secret2")

    @pytest.mark.asyncio
    async def test_email_matching_existing_name_rejected(self, core: Core):
        await core.services.user.create_user("b@x.com", "c@x.com", "secret1")
        with pytest.raises(DuplicateIdentityError):
            await core.services.user.create_user("dave", "B@X.COM", "secret2")

    @pytest.mark.asyncio
    async def test_unique_index_violation_maps_to_duplicate_identity(self, core: Core):
        await core.services.user.create_user("alice", "a@x.com", "secret1")
        # Simulate another process having registered the name without this cache knowing
        core.services.user._users.clear()
        with pytest.raises(DuplicateIdentityError):
            await core.services.user.create_user("Alice", "new@x.com", "secret1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["", "not-an-email", "a@", "@x.com"])
    async def test_malformed_email_rejected(self, core: Core, email: str):
        with pytest.raises(ValidationError):
            await core.services.user.create_user("alice", email, "secret1")

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, core: Core):
        with pytest.raises(ValidationError, match="Name is required"):
            await core.services.user.create_user("   ", "a@x.com", "secret1")

    @pytest.mark.asyncio
    async def test_empty_password_rejected(self, core: Core):
        with pytest.raises(ValidationError, match="Password is required"):
            await core.services.user.create_user("alice", "a@x.com", "")


@pytest_asyncio.fixture
async def alice(core: Core) -> User:
    return await core.services.user.create_user("Alice", "Alice@Example.com", "secret1")


class TestLookupAndVerify:
    """Tests for login lookup and password verification."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["alice", "ALICE", "alice@example.com", " Alice@example.COM "])
    async def test_find_by_name_or_email_ignores_case(self, core: Core, alice: User, identifier: str):
        assert core.services.user.find_by_login_or_email(identifier) == alice

    @pytest.mark.asyncio
    async def test_find_unknown_returns_none(self, core: Core, alice: User):
        assert core.services.user.find_by_login_or_email("nobody") is None
        assert core.services.user.find_by_login_or_email("") is None

    @pytest.mark.asyncio
    async def test_verify_password(self, core: Core, alice: User):
        assert core.services.user.verify_password(alice, "secret1") is True
        assert core.services.user.verify_password(alice, "Secret1") is False

    @pytest.mark.asyncio
    async def test_verify_against_malformed_hash_is_false(self, core: Core):
        broken = User(name="x", email="x@x.com", password_hash="not-a-hash")
        assert core.services.user.verify_password(broken, "anything") is False

    @pytest.mark.asyncio
    async def test_cache_reloads_from_database(self, core: Core, alice: User):
        core.services.user._users.clear()
        await core.services.user.update_all_users_cache()
        assert core.services.user.has_user(alice.id)


def test_user_view_never_contains_hash():
    user = User(name="alice", email="a@x.com", password_hash="$2b$04$abc")
    dumped = UserView.from_domain(user).model_dump(by_alias=True)
    assert dumped == {"uid": user.id, "name": "alice", "email": "a@x.com", "isAdmin": False}
