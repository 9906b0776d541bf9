"""
Tests for identikey.services.auth_service
"""

from unittest.mock import AsyncMock

import pytest

from identikey.exceptions import (
    DataValidationError,
    EngineUnavailable,
    InvalidCredentials,
    NoSuchUser,
    UserAlreadyExists,
)
from identikey.models.auth import AuthSession
from identikey.models.interfaces import IIdentityStore
from identikey.services.auth_service import AuthService


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_session(self, auth_service, identity_store):
        session = await auth_service.register("alice", "secret")

        assert isinstance(session, AuthSession)
        assert session.name == "alice"
        assert session.uid == "1"
        assert await identity_store.find_name_for_token(session.token) == "alice"

    @pytest.mark.asyncio
    async def test_register_duplicate_name(self, auth_service, fake_redis):
        await auth_service.register("alice", "secret")

        with pytest.raises(UserAlreadyExists):
            await auth_service.register("alice", "other")

        assert fake_redis.strings["global:uid"] == "1"

    @pytest.mark.asyncio
    async def test_register_strips_surrounding_whitespace(self, auth_service, identity_store):
        await auth_service.register("  alice  ", "secret")

        assert await identity_store.exists_by_name("alice") is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", "has space", "x" * 256])
    async def test_register_rejects_invalid_names(self, auth_service, name):
        with pytest.raises(DataValidationError):
            await auth_service.register(name, "secret")

    @pytest.mark.asyncio
    async def test_register_rejects_empty_password(self, auth_service):
        with pytest.raises(DataValidationError):
            await auth_service.register("alice", "")

    @pytest.mark.asyncio
    async def test_register_rejects_non_string_password(self, auth_service):
        with pytest.raises(DataValidationError):
            await auth_service.register("alice", None)


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_issues_new_token(self, auth_service):
        registered = await auth_service.register("alice", "secret")

        session = await auth_service.login("alice", "secret")

        assert session.token != registered.token
        assert await auth_service.whoami(session.token) == "alice"
        with pytest.raises(NoSuchUser):
            await auth_service.whoami(registered.token)

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service):
        await auth_service.register("alice", "secret")

        with pytest.raises(InvalidCredentials):
            await auth_service.login("alice", "wrong")

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, auth_service):
        with pytest.raises(InvalidCredentials):
            await auth_service.login("bob", "x")


class TestLogout:

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self, auth_service):
        session = await auth_service.register("alice", "secret")

        await auth_service.logout("alice")

        with pytest.raises(NoSuchUser):
            await auth_service.whoami(session.token)

    @pytest.mark.asyncio
    async def test_logout_twice(self, auth_service):
        await auth_service.register("alice", "secret")

        await auth_service.logout("alice")
        await auth_service.logout("alice")

    @pytest.mark.asyncio
    async def test_logout_unknown_user(self, auth_service):
        with pytest.raises(NoSuchUser):
            await auth_service.logout("nobody")

    @pytest.mark.asyncio
    async def test_whoami_empty_token(self, auth_service):
        with pytest.raises(NoSuchUser):
            await auth_service.whoami("")


class TestStoreInteraction:
    """Service behaviour against a mocked IIdentityStore"""

    @pytest.fixture
    def store(self):
        return AsyncMock(spec=IIdentityStore)

    @pytest.mark.asyncio
    async def test_register_checks_existence_first(self, store, security_settings):
        store.exists_by_name.return_value = True
        service = AuthService(store, security_settings)

        with pytest.raises(UserAlreadyExists):
            await service.register("alice", "secret")

        store.add_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_engine_faults_propagate(self, store, security_settings):
        store.authenticate.side_effect = EngineUnavailable("down")
        service = AuthService(store, security_settings)

        with pytest.raises(EngineUnavailable):
            await service.login("alice", "secret")

        store.issue_auth.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_resolves_uid_from_issued_token(self, store, security_settings):
        store.exists_by_name.return_value = False
        store.add_user.return_value = "tok-1"
        store.find_uid_for_token.return_value = "7"
        # A concurrent same-name registration owns the name index now
        store.find_uid.return_value = "8"
        service = AuthService(store, security_settings)

        session = await service.register("alice", "secret")

        assert session.uid == "7"
        store.find_uid_for_token.assert_awaited_once_with("tok-1")
        store.find_uid.assert_not_called()
