"""Unit tests for JWT utilities."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from flow.config import AuthSettings
from flow.domain.value import PrincipalKind
from flow.util.jwt import JWTError, MalformedTokenError, create_token, verify_token


@pytest.fixture
def auth_settings():
    return AuthSettings(
        access_token_secret="access-secret", refresh_token_secret="refresh-secret"
    )


class TestCreateAndVerify:
    """Tests for create_token and verify_token."""

    def test_access_token_round_trip_carries_kind(self, auth_settings):
        subject = str(uuid4())
        token = create_token(subject, PrincipalKind.SERVICE, "access", auth_settings)

        payload = verify_token(token, "access", auth_settings)

        assert payload.sub == subject
        assert payload.kind == PrincipalKind.SERVICE
        assert payload.type == "access"
        assert payload.jti is None

    def test_refresh_tokens_are_unique_per_issue(self, auth_settings):
        subject = str(uuid4())

        first = create_token(subject, PrincipalKind.USER, "refresh", auth_settings)
        second = create_token(subject, PrincipalKind.USER, "refresh", auth_settings)

        assert first != second

    def test_access_token_rejected_as_refresh(self, auth_settings):
        """Each type verifies only against its own secret."""
        token = create_token(str(uuid4()), PrincipalKind.USER, "access", auth_settings)

        with pytest.raises(JWTError):
            verify_token(token, "refresh", auth_settings)

    def test_same_secret_still_checks_type_claim(self):
        shared = AuthSettings(access_token_secret="same", refresh_token_secret="same")
        token = create_token(str(uuid4()), PrincipalKind.USER, "refresh", shared)

        with pytest.raises(JWTError, match="Expected access token"):
            verify_token(token, "access", shared)

    def test_expired_token(self, auth_settings):
        token = create_token(
            str(uuid4()),
            PrincipalKind.USER,
            "access",
            auth_settings,
            expires_in=timedelta(seconds=-1),
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, "access", auth_settings)

    def test_tampered_signature(self, auth_settings):
        token = create_token(str(uuid4()), PrincipalKind.USER, "access", auth_settings)
        other = AuthSettings(
            access_token_secret="someone-else", refresh_token_secret="refresh-secret"
        )

        with pytest.raises(JWTError):
            verify_token(token, "access", other)

    def test_missing_kind_is_malformed(self, auth_settings):
        token = jwt.encode(
            {"sub": str(uuid4()), "type": "access", "exp": 9999999999},
            auth_settings.access_token_secret,
            algorithm=auth_settings.jwt_algorithm,
        )

        with pytest.raises(MalformedTokenError):
            verify_token(token, "access", auth_settings)
