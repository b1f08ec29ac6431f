"""Domain layer errors.

Each error maps to one HTTP status in the interface layer:
ValidationError 400, AuthenticationError 401, NotAuthorizedError 403,
NotFoundError 404, ConflictError 409.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or invalid input (empty message, unknown status, ...)."""

    pass


class AuthenticationError(DomainError):
    """The caller could not be authenticated."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a principal acts on a resource it doesn't own."""

    def __init__(self, resource: str, resource_id: str, principal_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.principal_id = principal_id
        super().__init__(f"You are not allowed to modify this {resource}.")


class PrincipalKindError(DomainError):
    """Raised when an authenticated principal is of the wrong kind."""

    def __init__(self, action: str, required: str):
        self.action = action
        self.required = required
        super().__init__(f"Only {required} accounts can {action}.")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found.")


class ConflictError(DomainError):
    """Raised when an operation collides with existing state."""

    pass
