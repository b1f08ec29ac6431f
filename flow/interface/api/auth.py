"""Token transport for HTTP requests.

Access tokens travel in the ``accessToken`` cookie or an
``Authorization: Bearer`` header; refresh tokens in the ``refreshToken``
cookie or, as a fallback, the request body.
"""

from fastapi import Request, Response

from flow.config import Settings
from flow.domain.model import Principal
from flow.domain.service import PrincipalResolver
from flow.interface.error import MissingRefreshTokenError


def access_token_from(request: Request, settings: Settings) -> str | None:
    """Access token from the cookie, else from the Authorization header."""
    token = request.cookies.get(settings.cookies.access_cookie_name)
    if token:
        return token

    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def refresh_token_from(
    request: Request, settings: Settings, body_token: str | None = None
) -> str:
    """Refresh token from the cookie, else from the request body.

    Raises:
        MissingRefreshTokenError: If neither carries one
    """
    token = request.cookies.get(settings.cookies.refresh_cookie_name) or body_token
    if not token:
        raise MissingRefreshTokenError()
    return token


def set_session_cookies(
    response: Response, settings: Settings, access_token: str, refresh_token: str
) -> None:
    """Set both session cookies on ``response``."""
    cookies = settings.cookies
    response.set_cookie(
        key=cookies.access_cookie_name,
        value=access_token,
        max_age=settings.auth.access_token_expiry_minutes * 60,
        httponly=cookies.httponly,
        secure=cookies.secure,
        samesite=cookies.samesite,
        path=cookies.path,
    )
    response.set_cookie(
        key=cookies.refresh_cookie_name,
        value=refresh_token,
        max_age=settings.auth.refresh_token_expiry_days * 24 * 60 * 60,
        httponly=cookies.httponly,
        secure=cookies.secure,
        samesite=cookies.samesite,
        path=cookies.path,
    )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    """Delete both session cookies, matching the attributes they were set with."""
    cookies = settings.cookies
    for key in (cookies.access_cookie_name, cookies.refresh_cookie_name):
        response.delete_cookie(
            key=key,
            path=cookies.path,
            secure=cookies.secure,
            httponly=cookies.httponly,
            samesite=cookies.samesite,
        )


async def current_principal(
    request: Request, settings: Settings, resolver: PrincipalResolver
) -> Principal:
    """Resolve the caller; any principal kind is accepted."""
    return await resolver.resolve(access_token_from(request, settings))


async def optional_principal(
    request: Request, settings: Settings, resolver: PrincipalResolver
) -> Principal | None:
    """Resolve the caller if a usable token is present."""
    return await resolver.resolve_optional(access_token_from(request, settings))


async def current_user(
    request: Request, settings: Settings, resolver: PrincipalResolver, action: str
) -> Principal:
    """Resolve the caller and require a user account."""
    return await resolver.require_user(access_token_from(request, settings), action)


async def current_service(
    request: Request, settings: Settings, resolver: PrincipalResolver, action: str
) -> Principal:
    """Resolve the caller and require a service account."""
    return await resolver.require_service(access_token_from(request, settings), action)
