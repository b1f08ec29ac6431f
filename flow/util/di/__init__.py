"""Dependency injection module."""

from typing import Type

from flow.util.di.application import ProdApplicationProvider
from flow.util.di.base import Component, ProviderBase
from flow.util.di.core import ProdConfigProvider
from flow.util.di.domain import ProdDomainProvider
from flow.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from flow.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    # Concrete
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get the provider class to instantiate for ``base``.

    A provider with no subclasses is concrete and used as-is. A provider
    with subclasses is a swappable component; the subclass whose
    ``__is_mock__`` flag matches ``use_mock`` is selected.

    Args:
        base: Provider base class
        use_mock: Whether to select the test implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If no matching implementation is loaded
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", None) or base.__name__
        raise DependencyInjectionError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
