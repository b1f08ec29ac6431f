"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings are unusable for the current environment."""

    pass


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""

    pass


class TokenIssueError(UtilError):
    """Signing a token failed (bad key or algorithm)."""

    pass
