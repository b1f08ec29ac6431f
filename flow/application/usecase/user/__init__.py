"""User use cases."""

from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from .list_user_targets import ListUserTargetsRequest, ListUserTargetsUseCase
from .update_user import UpdateUserRequest, UpdateUserUseCase

__all__ = [
    "GetUserProfileRequest",
    "GetUserProfileResponse",
    "GetUserProfileUseCase",
    "ListUserTargetsRequest",
    "ListUserTargetsUseCase",
    "UpdateUserRequest",
    "UpdateUserUseCase",
]
