"""Unit tests for CredentialService."""

import pytest

from flow.domain.error import AuthenticationError
from flow.domain.model import Principal
from flow.domain.repository import ServiceRepository, UserRepository
from flow.domain.service import CredentialService
from flow.domain.value import PrincipalKind
from tests.conftest import make_service, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestPasswords:
    """Tests for password hashing."""

    @pytest.mark.asyncio
    async def test_hash_and_verify(self, unit_env):
        credentials = await unit_env.get(CredentialService)

        password_hash = await credentials.hash_password("correct horse")

        assert password_hash != "correct horse"
        assert await credentials.verify_password("correct horse", password_hash)
        assert not await credentials.verify_password("wrong horse", password_hash)


class TestSessions:
    """Tests for refresh-token sessions."""

    @pytest.mark.asyncio
    async def test_start_session_stores_refresh_token(self, unit_env):
        credentials = await unit_env.get(CredentialService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user())

        tokens = await credentials.start_session(user)

        assert (await users.find_by_id(user.id)).refresh_token == tokens.refresh_token

    @pytest.mark.asyncio
    async def test_refresh_rotates_and_rejects_reuse(self, unit_env):
        """The rotated-out refresh token can't be used again."""
        # Arrange
        credentials = await unit_env.get(CredentialService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user())
        first = await credentials.start_session(user)

        # Act
        account, second = await credentials.refresh(first.refresh_token)

        # Assert
        assert account.id == user.id
        assert second.refresh_token != first.refresh_token
        assert (await users.find_by_id(user.id)).refresh_token == second.refresh_token

        with pytest.raises(AuthenticationError):
            await credentials.refresh(first.refresh_token)

    @pytest.mark.asyncio
    async def test_new_login_invalidates_earlier_session(self, unit_env):
        credentials = await unit_env.get(CredentialService)
        services = await unit_env.get(ServiceRepository)
        service = await services.save(make_service())

        laptop = await credentials.start_session(service)
        await credentials.start_session(service)

        with pytest.raises(AuthenticationError):
            await credentials.refresh(laptop.refresh_token)

    @pytest.mark.asyncio
    async def test_end_session_blocks_refresh(self, unit_env):
        credentials = await unit_env.get(CredentialService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user())
        tokens = await credentials.start_session(user)

        await credentials.end_session(Principal.from_account(user))

        assert (await users.find_by_id(user.id)).refresh_token is None
        with pytest.raises(AuthenticationError):
            await credentials.refresh(tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_kind_restriction(self, unit_env):
        """A service refresh token is rejected on the user refresh path."""
        credentials = await unit_env.get(CredentialService)
        services = await unit_env.get(ServiceRepository)
        service = await services.save(make_service())
        tokens = await credentials.start_session(service)

        with pytest.raises(AuthenticationError):
            await credentials.refresh(tokens.refresh_token, kind=PrincipalKind.USER)

    @pytest.mark.asyncio
    async def test_access_token_is_not_a_refresh_token(self, unit_env):
        credentials = await unit_env.get(CredentialService)
        users = await unit_env.get(UserRepository)
        user = await users.save(make_user())
        tokens = await credentials.start_session(user)

        with pytest.raises(AuthenticationError):
            await credentials.refresh(tokens.access_token)

    @pytest.mark.asyncio
    async def test_missing_token(self, unit_env):
        credentials = await unit_env.get(CredentialService)

        with pytest.raises(AuthenticationError):
            await credentials.refresh(None)
