"""
Error taxonomy for the point-of-sale services.

Services raise these; the HTTP views translate them into status codes.
"""

from rest_framework import status


class PosError(Exception):
    """Base exception for point-of-sale errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Point-of-sale operation failed."

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class EmptyCartError(PosError):
    """Raised when a checkout is attempted without any cart lines."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Cart is empty."


class NotFoundError(PosError):
    """Raised when a product or transaction lookup by id finds nothing."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."


class StorageError(PosError):
    """Raised when the database is unavailable or a write fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage operation failed."


class ValidationError(PosError):
    """
    Raised for malformed administrative input.

    ``errors`` maps field names to lists of messages, the same shape DRF
    serializers use for ``serializer.errors``.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."

    def __init__(self, errors, detail=None):
        self.errors = errors
        super().__init__(detail)


def error_response_data(exc: PosError) -> dict:
    """Build the JSON body returned for a service error."""
    data = {"detail": str(exc.detail)}
    if isinstance(exc, ValidationError):
        data["errors"] = exc.errors
    return data
