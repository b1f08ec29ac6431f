"""Unit tests for PrincipalResolver."""

from datetime import timedelta
from uuid import uuid4

import pytest

from flow.config import AuthSettings
from flow.domain.error import AuthenticationError, PrincipalKindError
from flow.domain.repository import ServiceRepository, UserRepository
from flow.domain.service import PrincipalResolver, TokenService
from flow.domain.value import PrincipalKind
from flow.util.jwt import create_token
from tests.conftest import make_service, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestResolve:
    """Tests for resolve method."""

    @pytest.mark.asyncio
    async def test_user_token_resolves_to_user(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        tokens = await unit_env.get(TokenService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        principal = await resolver.resolve(tokens.create_access_token(user))

        assert principal.kind == PrincipalKind.USER
        assert principal.id == user.id
        assert principal.name == user.fullname

    @pytest.mark.asyncio
    async def test_service_token_resolves_to_service(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        tokens = await unit_env.get(TokenService)
        service = await (await unit_env.get(ServiceRepository)).save(make_service())

        principal = await resolver.resolve(tokens.create_access_token(service))

        assert principal.kind == PrincipalKind.SERVICE
        assert principal.id == service.id

    @pytest.mark.asyncio
    async def test_user_kind_never_falls_through_to_service_store(self, unit_env):
        """A user-kind token naming a service id is not a service principal."""
        # Arrange
        resolver = await unit_env.get(PrincipalResolver)
        auth_settings = await unit_env.get(AuthSettings)
        service = await (await unit_env.get(ServiceRepository)).save(make_service())

        token = create_token(
            subject=str(service.id),
            kind=PrincipalKind.USER,
            token_type="access",
            settings=auth_settings,
        )

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await resolver.resolve(token)

    @pytest.mark.asyncio
    async def test_unknown_subject_fails(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        auth_settings = await unit_env.get(AuthSettings)
        token = create_token(
            subject=str(uuid4()),
            kind=PrincipalKind.SERVICE,
            token_type="access",
            settings=auth_settings,
        )

        with pytest.raises(AuthenticationError):
            await resolver.resolve(token)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    async def test_missing_or_garbage_token_fails(self, unit_env, token):
        resolver = await unit_env.get(PrincipalResolver)

        with pytest.raises(AuthenticationError):
            await resolver.resolve(token)

    @pytest.mark.asyncio
    async def test_expired_token_fails(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        tokens = await unit_env.get(TokenService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        token = tokens.create_access_token(user, expires_in=timedelta(seconds=-5))

        with pytest.raises(AuthenticationError):
            await resolver.resolve(token)

    @pytest.mark.asyncio
    async def test_refresh_token_is_not_an_access_token(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        tokens = await unit_env.get(TokenService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        with pytest.raises(AuthenticationError):
            await resolver.resolve(tokens.create_refresh_token(user))

    @pytest.mark.asyncio
    async def test_non_uuid_subject_is_malformed(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        auth_settings = await unit_env.get(AuthSettings)
        token = create_token(
            subject="alice",
            kind=PrincipalKind.USER,
            token_type="access",
            settings=auth_settings,
        )

        with pytest.raises(AuthenticationError, match="Invalid token structure"):
            await resolver.resolve(token)


class TestRequireKind:
    """Tests for require_user and require_service."""

    @pytest.mark.asyncio
    async def test_service_cannot_act_as_user(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        tokens = await unit_env.get(TokenService)
        service = await (await unit_env.get(ServiceRepository)).save(make_service())

        with pytest.raises(PrincipalKindError):
            await resolver.require_user(tokens.create_access_token(service), "vote")

    @pytest.mark.asyncio
    async def test_user_cannot_act_as_service(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)
        tokens = await unit_env.get(TokenService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        with pytest.raises(PrincipalKindError):
            await resolver.require_service(
                tokens.create_access_token(user), "update issue status"
            )

    @pytest.mark.asyncio
    async def test_resolve_optional_swallows_bad_tokens(self, unit_env):
        resolver = await unit_env.get(PrincipalResolver)

        assert await resolver.resolve_optional(None) is None
        assert await resolver.resolve_optional("garbage") is None
