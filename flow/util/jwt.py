"""JWT token utilities.

Access and refresh tokens are signed with separate secrets and carry a
``type`` claim so one can never be accepted in place of the other. Every
token names its principal with ``sub`` (the id) and ``kind`` (user or service).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Literal
from uuid import uuid4

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flow.config import AuthSettings
from flow.domain.value import PrincipalKind
from flow.util.error import TokenIssueError

TokenType = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    kind: PrincipalKind
    type: TokenType
    exp: datetime
    iat: datetime | None = None
    jti: str | None = None
    email: str | None = None
    name: str | None = None


class JWTError(Exception):
    """JWT-related error."""

    pass


class MalformedTokenError(JWTError):
    """Token verified but lacks the claims needed to identify a principal."""

    pass


def _secret_for(token_type: TokenType, settings: AuthSettings) -> str:
    if token_type == "access":
        return settings.access_token_secret
    return settings.refresh_token_secret


def create_token(
    subject: str,
    kind: PrincipalKind,
    token_type: TokenType,
    settings: AuthSettings,
    claims: dict[str, Any] | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Create a signed JWT for a principal.

    Args:
        subject: Principal ID
        kind: Principal kind (user or service)
        token_type: "access" or "refresh"
        settings: Authentication settings
        claims: Extra claims to embed (email, name)
        expires_in: Override the configured lifetime

    Returns:
        Encoded JWT token

    Raises:
        TokenIssueError: If the token cannot be signed
    """
    now = datetime.now(timezone.utc)
    if expires_in is None:
        if token_type == "access":
            expires_in = timedelta(minutes=settings.access_token_expiry_minutes)
        else:
            expires_in = timedelta(days=settings.refresh_token_expiry_days)

    payload: dict[str, Any] = {
        **(claims or {}),
        "sub": subject,
        "kind": kind.value,
        "type": token_type,
        "iat": now,
        "exp": now + expires_in,
    }
    if token_type == "refresh":
        # Unique per issue, so a rotated token never equals its successor
        payload["jti"] = uuid4().hex

    try:
        return jwt.encode(
            payload,
            _secret_for(token_type, settings),
            algorithm=settings.jwt_algorithm,
        )
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise TokenIssueError(f"Failed to sign {token_type} token: {e}") from e


def verify_token(
    token: str, token_type: TokenType, settings: AuthSettings
) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        token_type: Expected token type; selects the verification secret
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or of the wrong type
        MalformedTokenError: If token is valid but has no subject or kind
    """
    try:
        payload = jwt.decode(
            token,
            _secret_for(token_type, settings),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if payload.get("type") != token_type:
        raise JWTError(f"Expected {token_type} token")

    if not payload.get("sub") or not payload.get("kind"):
        raise MalformedTokenError("Token is missing subject or kind")

    try:
        return TokenPayload(**payload)
    except PydanticValidationError as e:
        raise MalformedTokenError(f"Token claims are invalid: {e.error_count()} errors")
