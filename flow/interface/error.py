"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class MissingRefreshTokenError(InterfaceError):
    """No refresh token in the cookie or the request body."""

    pass
