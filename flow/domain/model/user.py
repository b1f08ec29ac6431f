"""User account.

Users file feedback, issues and bugs against services, vote, comment and like.
"""

from pydantic import Field

from flow.domain.model.account import Account
from flow.domain.value import PrincipalKind, UserId, Username


class User(Account):
    """User aggregate root."""

    id: UserId
    username: Username
    fullname: str = Field(min_length=1, max_length=100)

    @property
    def kind(self) -> PrincipalKind:
        return PrincipalKind.USER

    @property
    def display_name(self) -> str:
        return self.fullname
