"""Target use cases (feedback, issues and bugs)."""

from .create_target import CreateTargetRequest, CreateTargetUseCase
from .delete_target import (
    DeleteTargetRequest,
    DeleteTargetResponse,
    DeleteTargetUseCase,
)
from .get_target import GetTargetRequest, GetTargetResponse, GetTargetUseCase
from .list_targets import ListTargetsRequest, ListTargetsUseCase
from .update_target_status import UpdateTargetStatusRequest, UpdateTargetStatusUseCase

__all__ = [
    "CreateTargetRequest",
    "CreateTargetUseCase",
    "DeleteTargetRequest",
    "DeleteTargetResponse",
    "DeleteTargetUseCase",
    "GetTargetRequest",
    "GetTargetResponse",
    "GetTargetUseCase",
    "ListTargetsRequest",
    "ListTargetsUseCase",
    "UpdateTargetStatusRequest",
    "UpdateTargetStatusUseCase",
]
