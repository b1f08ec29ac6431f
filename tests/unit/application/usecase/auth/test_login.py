"""Unit tests for LoginUseCase and RefreshSessionUseCase."""

import pytest

from flow.application.usecase.auth import (
    LoginRequest,
    LoginUseCase,
    RefreshSessionRequest,
    RefreshSessionUseCase,
    RegisterServiceRequest,
    RegisterServiceUseCase,
    RegisterUserRequest,
    RegisterUserUseCase,
)
from flow.domain.error import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from flow.domain.value import PrincipalKind
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _register_user(env, username: str = "ursula"):
    return await (await env.get(RegisterUserUseCase)).execute(
        RegisterUserRequest(
            username=username,
            email=f"{username}@example.com",
            fullname=username.capitalize(),
            password="hunter22",
        )
    )


class TestRegister:
    """Tests for account registration."""

    @pytest.mark.asyncio
    async def test_missing_field_rejected(self, unit_env):
        with pytest.raises(ValidationError):
            await (await unit_env.get(RegisterUserUseCase)).execute(
                RegisterUserRequest(
                    username="ursula", email="", fullname="Ursula", password="x"
                )
            )

    @pytest.mark.asyncio
    async def test_duplicate_user_conflicts(self, unit_env):
        await _register_user(unit_env)

        with pytest.raises(ConflictError):
            await _register_user(unit_env)

    @pytest.mark.asyncio
    async def test_service_requires_description(self, unit_env):
        with pytest.raises(ValidationError):
            await (await unit_env.get(RegisterServiceUseCase)).execute(
                RegisterServiceRequest(
                    name="Acme", email="a@acme.io", password="pw", description=" "
                )
            )


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_by_username(self, unit_env):
        user = await _register_user(unit_env)

        response = await (await unit_env.get(LoginUseCase)).execute(
            LoginRequest(kind=PrincipalKind.USER, username="URSULA", password="hunter22")
        )

        assert response.kind == PrincipalKind.USER
        assert response.user.id == user.id
        assert response.service is None

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        await _register_user(unit_env)

        with pytest.raises(AuthenticationError):
            await (await unit_env.get(LoginUseCase)).execute(
                LoginRequest(
                    kind=PrincipalKind.USER,
                    email="ursula@example.com",
                    password="wrong",
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_account(self, unit_env):
        with pytest.raises(NotFoundError):
            await (await unit_env.get(LoginUseCase)).execute(
                LoginRequest(
                    kind=PrincipalKind.SERVICE, email="nobody@acme.io", password="pw"
                )
            )

    @pytest.mark.asyncio
    async def test_user_credentials_do_not_log_into_service_kind(self, unit_env):
        await _register_user(unit_env)

        with pytest.raises(NotFoundError):
            await (await unit_env.get(LoginUseCase)).execute(
                LoginRequest(
                    kind=PrincipalKind.SERVICE,
                    email="ursula@example.com",
                    password="hunter22",
                )
            )


class TestRefreshSessionUseCase:
    """Tests for RefreshSessionUseCase."""

    @pytest.mark.asyncio
    async def test_refresh_then_reuse_rejected(self, unit_env):
        await _register_user(unit_env)
        login = await (await unit_env.get(LoginUseCase)).execute(
            LoginRequest(
                kind=PrincipalKind.USER, email="ursula@example.com", password="hunter22"
            )
        )
        refresh = await unit_env.get(RefreshSessionUseCase)

        rotated = await refresh.execute(
            RefreshSessionRequest(
                kind=PrincipalKind.USER, refresh_token=login.refresh_token
            )
        )

        assert rotated.refresh_token != login.refresh_token
        with pytest.raises(AuthenticationError):
            await refresh.execute(
                RefreshSessionRequest(
                    kind=PrincipalKind.USER, refresh_token=login.refresh_token
                )
            )
