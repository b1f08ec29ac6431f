"""Authentication use cases."""

from .get_current_principal import (
    GetCurrentPrincipalRequest,
    GetCurrentPrincipalResponse,
    GetCurrentPrincipalUseCase,
)
from .login import LoginRequest, LoginResponse, LoginUseCase
from .logout import LogoutRequest, LogoutUseCase
from .refresh_session import (
    RefreshSessionRequest,
    RefreshSessionResponse,
    RefreshSessionUseCase,
)
from .register_service import RegisterServiceRequest, RegisterServiceUseCase
from .register_user import RegisterUserRequest, RegisterUserUseCase

__all__ = [
    "GetCurrentPrincipalRequest",
    "GetCurrentPrincipalResponse",
    "GetCurrentPrincipalUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutUseCase",
    "RefreshSessionRequest",
    "RefreshSessionResponse",
    "RefreshSessionUseCase",
    "RegisterServiceRequest",
    "RegisterServiceUseCase",
    "RegisterUserRequest",
    "RegisterUserUseCase",
]
