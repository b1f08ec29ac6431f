"""Service account use cases."""

from .delete_service import (
    DeleteServiceRequest,
    DeleteServiceResponse,
    DeleteServiceUseCase,
)
from .get_service_activity import (
    GetServiceActivityRequest,
    GetServiceActivityResponse,
    GetServiceActivityUseCase,
)
from .get_service_details import (
    GetServiceDetailsRequest,
    GetServiceDetailsResponse,
    GetServiceDetailsUseCase,
)
from .list_services import ListServicesRequest, ListServicesUseCase
from .top_services import TopServicesRequest, TopServicesResponse, TopServicesUseCase
from .update_service import UpdateServiceRequest, UpdateServiceUseCase

__all__ = [
    "DeleteServiceRequest",
    "DeleteServiceResponse",
    "DeleteServiceUseCase",
    "GetServiceActivityRequest",
    "GetServiceActivityResponse",
    "GetServiceActivityUseCase",
    "GetServiceDetailsRequest",
    "GetServiceDetailsResponse",
    "GetServiceDetailsUseCase",
    "ListServicesRequest",
    "ListServicesUseCase",
    "TopServicesRequest",
    "TopServicesResponse",
    "TopServicesUseCase",
    "UpdateServiceRequest",
    "UpdateServiceUseCase",
]
