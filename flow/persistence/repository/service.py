"""PostgreSQL implementation of Service repository."""

from typing import Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import case, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flow.domain.model import Service
from flow.domain.repository import ServiceRepository, ServiceSortOrder
from flow.domain.value import Email, ServiceId
from flow.persistence.mappers import row_to_service, service_to_dict
from flow.persistence.tables import services_table


class PostgresServiceRepository(ServiceRepository):
    """PostgreSQL implementation of ServiceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _name_matches(search: str):
        # autoescape keeps % and _ in the search literal
        return services_table.c.name.icontains(search, autoescape=True)

    async def find_by_id(self, service_id: ServiceId) -> Optional[Service]:
        """Find a service by ID."""
        stmt = select(services_table).where(services_table.c.id == service_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_service(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Service]:
        """Find a service by email."""
        stmt = select(services_table).where(services_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_service(dict(row)) if row else None

    async def find_by_ids(self, service_ids: Sequence[ServiceId]) -> list[Service]:
        """Find several services at once."""
        if not service_ids:
            return []
        stmt = select(services_table).where(services_table.c.id.in_(list(service_ids)))
        result = await self.session.execute(stmt)
        return [row_to_service(dict(row)) for row in result.mappings().all()]

    async def find_all(
        self,
        search: Optional[str] = None,
        sort: ServiceSortOrder = ServiceSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Service]:
        """Find services with search and pagination."""
        with logfire.span(
            "service_repository.find_all",
            search=search,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = select(services_table)

            if search:
                stmt = stmt.where(self._name_matches(search))

            if sort == ServiceSortOrder.OLDEST:
                stmt = stmt.order_by(services_table.c.created_at)
            elif sort == ServiceSortOrder.TOP:
                stmt = stmt.order_by(
                    desc(services_table.c.upvotes), desc(services_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(services_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            return [row_to_service(dict(row)) for row in result.mappings().all()]

    async def count(self, search: Optional[str] = None) -> int:
        """Count services matching a name search."""
        stmt = select(func.count()).select_from(services_table)
        if search:
            stmt = stmt.where(self._name_matches(search))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, service: Service) -> Service:
        """Save a service (create or update).

        Updates leave ``upvotes`` alone; it only changes through the atomic
        increment/decrement methods.

        Raises:
            IntegrityError: If the email is already taken
        """
        existing = await self.find_by_id(service.id)

        service_dict = service_to_dict(service)

        if existing:
            service_dict.pop("upvotes")
            stmt = (
                services_table.update()
                .where(services_table.c.id == service.id)
                .values(**service_dict)
            )
        else:
            stmt = services_table.insert().values(**service_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return service

    async def delete(self, service_id: ServiceId) -> None:
        """Delete a service (hard delete)."""
        stmt = delete(services_table).where(services_table.c.id == service_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_refresh_token(
        self, account_id: UUID, refresh_token: Optional[str]
    ) -> None:
        """Replace the service's stored refresh token."""
        stmt = (
            services_table.update()
            .where(services_table.c.id == account_id)
            .values(refresh_token=refresh_token)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_upvotes(self, service_id: ServiceId) -> None:
        """Atomically increment a service's upvotes by 1."""
        stmt = (
            services_table.update()
            .where(services_table.c.id == service_id)
            .values(upvotes=services_table.c.upvotes + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_upvotes(self, service_id: ServiceId) -> None:
        """Atomically decrement a service's upvotes by 1 (minimum 0)."""
        stmt = (
            services_table.update()
            .where(services_table.c.id == service_id)
            .values(
                upvotes=case(
                    (services_table.c.upvotes > 0, services_table.c.upvotes - 1),
                    else_=0,
                )
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
