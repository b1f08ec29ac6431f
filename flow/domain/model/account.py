"""Shared shape of authenticatable accounts (users and services)."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from flow.domain.model.common import DomainModel, utcnow
from flow.domain.value import Email, PrincipalKind


class Account(DomainModel):
    """Credentials and session state common to every principal kind.

    ``refresh_token`` holds the single active refresh token; issuing a new
    one replaces it, and logout clears it.
    """

    id: UUID
    email: Email
    password_hash: str
    refresh_token: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def kind(self) -> PrincipalKind:
        raise NotImplementedError

    @property
    def display_name(self) -> str:
        raise NotImplementedError
