"""Domain layer DI providers."""

from dishka import Scope, provide

from flow.config import ActivitySettings, AuthSettings
from flow.domain.repository import (
    AccountRepository,
    CommentRepository,
    LikeRepository,
    ServiceRepository,
    ServiceVoteRepository,
    TargetRepository,
    UserRepository,
    VoteRepository,
)
from flow.domain.service import (
    ActivityService,
    CommentService,
    CredentialService,
    PrincipalResolver,
    ServiceAccountService,
    TargetService,
    TokenService,
    UserService,
    VoteService,
)
from flow.domain.value import PrincipalKind
from flow.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider.

    Domain services are REQUEST-scoped to share the request's repositories
    and therefore its transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_account_repositories(
        self, user_repository: UserRepository, service_repository: ServiceRepository
    ) -> dict[PrincipalKind, AccountRepository]:
        """Map each principal kind to the store its accounts live in."""
        return {
            PrincipalKind.USER: user_repository,
            PrincipalKind.SERVICE: service_repository,
        }

    @provide
    def get_token_service(self, auth_settings: AuthSettings) -> TokenService:
        return TokenService(auth_settings=auth_settings)

    @provide
    def get_credential_service(
        self,
        token_service: TokenService,
        account_repositories: dict[PrincipalKind, AccountRepository],
        auth_settings: AuthSettings,
    ) -> CredentialService:
        """Provide credential domain service."""
        return CredentialService(
            token_service=token_service,
            account_repositories=account_repositories,
            auth_settings=auth_settings,
        )

    @provide
    def get_principal_resolver(
        self,
        token_service: TokenService,
        account_repositories: dict[PrincipalKind, AccountRepository],
    ) -> PrincipalResolver:
        """Provide principal resolver."""
        return PrincipalResolver(
            token_service=token_service, account_repositories=account_repositories
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_service_account_service(
        self, service_repository: ServiceRepository
    ) -> ServiceAccountService:
        """Provide service account domain service."""
        return ServiceAccountService(service_repository=service_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        target_repository: TargetRepository,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            like_repository=like_repository,
            target_repository=target_repository,
        )

    @provide
    def get_target_service(
        self,
        target_repository: TargetRepository,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> TargetService:
        """Provide target domain service."""
        return TargetService(
            target_repository=target_repository,
            vote_repository=vote_repository,
            comment_service=comment_service,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        service_vote_repository: ServiceVoteRepository,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            service_vote_repository=service_vote_repository,
            target_service=target_service,
            service_account_service=service_account_service,
        )

    @provide
    def get_activity_service(
        self,
        target_repository: TargetRepository,
        service_vote_repository: ServiceVoteRepository,
        activity_settings: ActivitySettings,
    ) -> ActivityService:
        """Provide activity domain service."""
        return ActivityService(
            target_repository=target_repository,
            service_vote_repository=service_vote_repository,
            activity_settings=activity_settings,
        )
