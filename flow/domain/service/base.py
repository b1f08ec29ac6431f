"""Base class for domain services."""


class DomainService:
    """Base class for all domain services.

    Domain services hold business logic that spans several entities or
    repositories. They are request-scoped and share the request's session.
    """

    pass
