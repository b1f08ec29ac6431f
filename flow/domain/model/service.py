"""Service account.

A service is a business that registers to collect feedback, issues and bugs
from users. It is also a principal: it logs in and manages its own issues.
"""

from typing import Optional

from pydantic import Field

from flow.domain.model.account import Account
from flow.domain.value import PrincipalKind, ServiceId


class Service(Account):
    """Service aggregate root.

    ``upvotes`` is a cache of the ServiceVote ledger, never below zero.
    """

    id: ServiceId
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    service_link: Optional[str] = None
    logo_url: Optional[str] = None
    upvotes: int = Field(default=0, ge=0)

    @property
    def kind(self) -> PrincipalKind:
        return PrincipalKind.SERVICE

    @property
    def display_name(self) -> str:
        return self.name
