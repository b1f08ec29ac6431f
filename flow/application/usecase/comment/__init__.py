"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .reply_to_comment import ReplyToCommentRequest, ReplyToCommentUseCase
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "AddCommentRequest",
    "AddCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "ReplyToCommentRequest",
    "ReplyToCommentUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
