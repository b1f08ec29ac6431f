"""Authenticated principal attached to a request."""

from uuid import UUID

from flow.domain.model.account import Account
from flow.domain.model.common import DomainModel
from flow.domain.value import PrincipalKind, ServiceId, UserId


class Principal(DomainModel):
    """Tagged reference to the account behind a verified access token."""

    kind: PrincipalKind
    id: UUID
    name: str
    email: str

    @classmethod
    def from_account(cls, account: Account) -> "Principal":
        return cls(
            kind=account.kind,
            id=account.id,
            name=account.display_name,
            email=str(account.email),
        )

    @property
    def is_user(self) -> bool:
        return self.kind == PrincipalKind.USER

    @property
    def is_service(self) -> bool:
        return self.kind == PrincipalKind.SERVICE

    @property
    def user_id(self) -> UserId:
        return UserId(self.id)

    @property
    def service_id(self) -> ServiceId:
        return ServiceId(self.id)
