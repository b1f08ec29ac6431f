"""Service account domain service."""

from typing import Sequence
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from flow.domain.error import ConflictError
from flow.domain.model import Service
from flow.domain.model.common import utcnow
from flow.domain.repository import ServiceRepository, ServiceSortOrder
from flow.domain.value import Email, ServiceId

from .base import DomainService


class ServiceAccountService(DomainService):
    """Domain service for service accounts (the businesses users report to)."""

    def __init__(self, service_repository: ServiceRepository) -> None:
        """Initialize service account service.

        Args:
            service_repository: Service repository
        """
        self.service_repository = service_repository

    async def get_service_by_id(self, service_id: ServiceId) -> Service | None:
        """Get a service by ID."""
        with logfire.span(
            "service_account_service.get_service_by_id", service_id=str(service_id)
        ):
            service = await self.service_repository.find_by_id(service_id)
            if not service:
                logfire.warn("Service not found", service_id=str(service_id))
            return service

    async def get_service_by_email(self, email: Email) -> Service | None:
        """Get a service by email."""
        return await self.service_repository.find_by_email(email)

    async def get_services_by_ids(
        self, service_ids: Sequence[ServiceId]
    ) -> dict[ServiceId, Service]:
        """Get several services keyed by ID (unknown IDs are absent)."""
        if not service_ids:
            return {}
        services = await self.service_repository.find_by_ids(list(set(service_ids)))
        return {service.id: service for service in services}

    async def register_service(
        self,
        name: str,
        email: Email,
        password_hash: str,
        description: str,
        service_link: str | None = None,
        logo_url: str | None = None,
    ) -> Service:
        """Create a service account.

        Raises:
            ConflictError: If the email is taken by another service
        """
        with logfire.span("service_account_service.register_service", name=name):
            if await self.service_repository.find_by_email(email):
                logfire.warn("Email already registered for a service")
                raise ConflictError("Service with this email already exists.")

            now = utcnow()
            service = Service(
                id=ServiceId(uuid4()),
                name=name,
                email=email,
                password_hash=password_hash,
                description=description,
                service_link=service_link,
                logo_url=logo_url,
                upvotes=0,
                refresh_token=None,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.service_repository.save(service)
            except IntegrityError:
                raise ConflictError("Service with this email already exists.")

            logfire.info("Service registered", service_id=str(saved.id), name=name)
            return saved

    async def update_service(
        self,
        service: Service,
        name: str | None = None,
        email: Email | None = None,
        description: str | None = None,
        service_link: str | None = None,
        logo_url: str | None = None,
        password_hash: str | None = None,
    ) -> Service:
        """Update a service's profile fields; None leaves a field unchanged.

        Raises:
            ConflictError: If the new email belongs to another service
        """
        with logfire.span(
            "service_account_service.update_service", service_id=str(service.id)
        ):
            updates: dict = {"updated_at": utcnow()}

            if email is not None and email != service.email:
                other = await self.service_repository.find_by_email(email)
                if other and other.id != service.id:
                    raise ConflictError("Email is already in use by another service.")
                updates["email"] = email

            for field, value in (
                ("name", name),
                ("description", description),
                ("service_link", service_link),
                ("logo_url", logo_url),
                ("password_hash", password_hash),
            ):
                if value is not None:
                    updates[field] = value

            updated = Service.model_validate({**service.model_dump(), **updates})

            try:
                saved = await self.service_repository.save(updated)
            except IntegrityError:
                raise ConflictError("Email is already in use by another service.")

            logfire.info(
                "Service updated",
                service_id=str(service.id),
                fields=sorted(k for k in updates if k != "updated_at"),
            )
            return saved

    async def list_services(
        self,
        search: str | None,
        sort: ServiceSortOrder,
        limit: int,
        offset: int,
    ) -> tuple[list[Service], int]:
        """List services matching a name search.

        Returns:
            Page of services and the total number of matches
        """
        with logfire.span(
            "service_account_service.list_services",
            search=search,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            services = await self.service_repository.find_all(
                search=search, sort=sort, limit=limit, offset=offset
            )
            total = await self.service_repository.count(search=search)
            return services, total

    async def top_services(self, limit: int) -> list[Service]:
        """Most upvoted services."""
        return await self.service_repository.find_all(
            sort=ServiceSortOrder.TOP, limit=limit, offset=0
        )

    async def increment_upvotes(self, service_id: ServiceId) -> None:
        """Atomically increment a service's upvote counter."""
        await self.service_repository.increment_upvotes(service_id)

    async def decrement_upvotes(self, service_id: ServiceId) -> None:
        """Atomically decrement a service's upvote counter, clamped at 0."""
        await self.service_repository.decrement_upvotes(service_id)

    async def delete_service(self, service_id: ServiceId) -> None:
        """Delete the service row. Callers remove dependent content first."""
        with logfire.span(
            "service_account_service.delete_service", service_id=str(service_id)
        ):
            await self.service_repository.delete(service_id)
            logfire.info("Service deleted", service_id=str(service_id))
