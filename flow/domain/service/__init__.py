"""Domain services."""

from .activity_service import ActivityService
from .base import DomainService
from .comment_service import CommentService, CommentThread, LikeState
from .credential_service import CredentialService, SessionTokens
from .principal_resolver import PrincipalResolver
from .service_account_service import ServiceAccountService
from .target_service import TargetService
from .token_service import TokenService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "ActivityService",
    "CommentService",
    "CommentThread",
    "CredentialService",
    "DomainService",
    "LikeState",
    "PrincipalResolver",
    "ServiceAccountService",
    "SessionTokens",
    "TargetService",
    "TokenService",
    "UserService",
    "VoteService",
]
