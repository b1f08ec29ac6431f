"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from flow.config import ActivitySettings, AuthSettings, PaginationSettings, Settings
from flow.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider. Settings come from the environment and .env."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        return settings.pagination

    @provide(scope=Scope.APP)
    def provide_activity_settings(self, settings: Settings) -> ActivitySettings:
        return settings.activity
