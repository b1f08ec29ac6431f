"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_vote import GetVoteRequest, GetVoteResponse, GetVoteUseCase
from .upvote_service import (
    RemoveServiceUpvoteUseCase,
    ServiceUpvoteRequest,
    ServiceUpvoteResponse,
    UpvoteServiceUseCase,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetVoteRequest",
    "GetVoteResponse",
    "GetVoteUseCase",
    "RemoveServiceUpvoteUseCase",
    "ServiceUpvoteRequest",
    "ServiceUpvoteResponse",
    "UpvoteServiceUseCase",
]
