"""Application layer DI providers."""

from dishka import Scope, provide

from flow.application.usecase.auth import (
    GetCurrentPrincipalUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshSessionUseCase,
    RegisterServiceUseCase,
    RegisterUserUseCase,
)
from flow.application.usecase.comment import (
    AddCommentUseCase,
    DeleteCommentUseCase,
    ReplyToCommentUseCase,
    ToggleLikeUseCase,
    UpdateCommentUseCase,
)
from flow.application.usecase.service import (
    DeleteServiceUseCase,
    GetServiceActivityUseCase,
    GetServiceDetailsUseCase,
    ListServicesUseCase,
    TopServicesUseCase,
    UpdateServiceUseCase,
)
from flow.application.usecase.target import (
    CreateTargetUseCase,
    DeleteTargetUseCase,
    GetTargetUseCase,
    ListTargetsUseCase,
    UpdateTargetStatusUseCase,
)
from flow.application.usecase.user import (
    GetUserProfileUseCase,
    ListUserTargetsUseCase,
    UpdateUserUseCase,
)
from flow.application.usecase.vote import (
    CastVoteUseCase,
    GetVoteUseCase,
    RemoveServiceUpvoteUseCase,
    UpvoteServiceUseCase,
)
from flow.config import ActivitySettings, PaginationSettings
from flow.domain.service import (
    ActivityService,
    CommentService,
    CredentialService,
    PrincipalResolver,
    ServiceAccountService,
    TargetService,
    UserService,
    VoteService,
)
from flow.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, user_service: UserService, credential_service: CredentialService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(
            user_service=user_service, credential_service=credential_service
        )

    @provide(scope=Scope.REQUEST)
    def get_register_service_use_case(
        self,
        service_account_service: ServiceAccountService,
        credential_service: CredentialService,
    ) -> RegisterServiceUseCase:
        """Provide register service use case."""
        return RegisterServiceUseCase(
            service_account_service=service_account_service,
            credential_service=credential_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        user_service: UserService,
        service_account_service: ServiceAccountService,
        credential_service: CredentialService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            user_service=user_service,
            service_account_service=service_account_service,
            credential_service=credential_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_session_use_case(
        self, credential_service: CredentialService
    ) -> RefreshSessionUseCase:
        return RefreshSessionUseCase(credential_service=credential_service)

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, credential_service: CredentialService) -> LogoutUseCase:
        return LogoutUseCase(credential_service=credential_service)

    @provide(scope=Scope.REQUEST)
    def get_current_principal_use_case(
        self, principal_resolver: PrincipalResolver
    ) -> GetCurrentPrincipalUseCase:
        """Provide get current principal use case."""
        return GetCurrentPrincipalUseCase(principal_resolver=principal_resolver)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_user_profile_use_case(
        self,
        user_service: UserService,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(
            user_service=user_service,
            target_service=target_service,
            service_account_service=service_account_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_user_use_case(
        self, user_service: UserService, credential_service: CredentialService
    ) -> UpdateUserUseCase:
        """Provide update user use case."""
        return UpdateUserUseCase(
            user_service=user_service, credential_service=credential_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_targets_use_case(
        self,
        user_service: UserService,
        target_service: TargetService,
        pagination_settings: PaginationSettings,
    ) -> ListUserTargetsUseCase:
        """Provide list user targets use case."""
        return ListUserTargetsUseCase(
            user_service=user_service,
            target_service=target_service,
            pagination_settings=pagination_settings,
        )

    # Service use cases
    @provide(scope=Scope.REQUEST)
    def get_list_services_use_case(
        self,
        service_account_service: ServiceAccountService,
        pagination_settings: PaginationSettings,
    ) -> ListServicesUseCase:
        """Provide list services use case."""
        return ListServicesUseCase(
            service_account_service=service_account_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_top_services_use_case(
        self,
        service_account_service: ServiceAccountService,
        activity_settings: ActivitySettings,
        pagination_settings: PaginationSettings,
    ) -> TopServicesUseCase:
        """Provide top services use case."""
        return TopServicesUseCase(
            service_account_service=service_account_service,
            activity_settings=activity_settings,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_service_details_use_case(
        self,
        service_account_service: ServiceAccountService,
        target_service: TargetService,
        vote_service: VoteService,
    ) -> GetServiceDetailsUseCase:
        """Provide get service details use case."""
        return GetServiceDetailsUseCase(
            service_account_service=service_account_service,
            target_service=target_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_service_use_case(
        self,
        service_account_service: ServiceAccountService,
        credential_service: CredentialService,
    ) -> UpdateServiceUseCase:
        """Provide update service use case."""
        return UpdateServiceUseCase(
            service_account_service=service_account_service,
            credential_service=credential_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_service_use_case(
        self,
        service_account_service: ServiceAccountService,
        target_service: TargetService,
        vote_service: VoteService,
    ) -> DeleteServiceUseCase:
        """Provide delete service use case."""
        return DeleteServiceUseCase(
            service_account_service=service_account_service,
            target_service=target_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_service_activity_use_case(
        self,
        service_account_service: ServiceAccountService,
        activity_service: ActivityService,
    ) -> GetServiceActivityUseCase:
        """Provide service activity use case."""
        return GetServiceActivityUseCase(
            service_account_service=service_account_service,
            activity_service=activity_service,
        )

    # Target use cases
    @provide(scope=Scope.REQUEST)
    def get_create_target_use_case(
        self,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
    ) -> CreateTargetUseCase:
        """Provide create target use case."""
        return CreateTargetUseCase(
            target_service=target_service,
            service_account_service=service_account_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_target_use_case(
        self,
        target_service: TargetService,
        comment_service: CommentService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> GetTargetUseCase:
        """Provide get target use case."""
        return GetTargetUseCase(
            target_service=target_service,
            comment_service=comment_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_targets_use_case(
        self,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
        pagination_settings: PaginationSettings,
    ) -> ListTargetsUseCase:
        """Provide list targets use case."""
        return ListTargetsUseCase(
            target_service=target_service,
            service_account_service=service_account_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_target_use_case(
        self, target_service: TargetService
    ) -> DeleteTargetUseCase:
        return DeleteTargetUseCase(target_service=target_service)

    @provide(scope=Scope.REQUEST)
    def get_update_target_status_use_case(
        self, target_service: TargetService
    ) -> UpdateTargetStatusUseCase:
        return UpdateTargetStatusUseCase(target_service=target_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, target_service: TargetService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service, target_service=target_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_use_case(self, vote_service: VoteService) -> GetVoteUseCase:
        return GetVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_upvote_service_use_case(
        self, vote_service: VoteService
    ) -> UpvoteServiceUseCase:
        return UpvoteServiceUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_service_upvote_use_case(
        self, vote_service: VoteService
    ) -> RemoveServiceUpvoteUseCase:
        return RemoveServiceUpvoteUseCase(vote_service=vote_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self, comment_service: CommentService, target_service: TargetService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(
            comment_service=comment_service, target_service=target_service
        )

    @provide(scope=Scope.REQUEST)
    def get_reply_to_comment_use_case(
        self, comment_service: CommentService
    ) -> ReplyToCommentUseCase:
        return ReplyToCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, comment_service: CommentService
    ) -> ToggleLikeUseCase:
        return ToggleLikeUseCase(comment_service=comment_service)
