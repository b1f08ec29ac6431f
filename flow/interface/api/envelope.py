"""Response envelope shared by every endpoint.

Success:  {"statusCode": 200, "data": {...}, "message": "...", "success": true}
Error:    {"statusCode": 404, "message": "...", "success": false}
"""

from typing import Generic, TypeVar

from flow.application.usecase.common import CamelModel

T = TypeVar("T")


class ApiResponse(CamelModel, Generic[T]):
    """Successful response."""

    status_code: int = 200
    data: T
    message: str = "Success"
    success: bool = True


class ErrorResponse(CamelModel):
    """Failed response."""

    status_code: int
    message: str
    success: bool = False


def ok(data: T, message: str = "Success", status_code: int = 200) -> ApiResponse[T]:
    """Wrap ``data`` in a success envelope."""
    return ApiResponse(status_code=status_code, data=data, message=message)
