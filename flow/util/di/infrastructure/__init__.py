"""Infrastructure providers."""

from .persistence import PersistenceProvider

# Implementations must be imported for __subclasses__() lookup
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
