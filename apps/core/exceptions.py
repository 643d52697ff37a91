"""
Error taxonomy shared by every back office operation.

Services raise these exceptions; the REST layer turns them into
``{"detail": ..., "code": ...}`` responses through
:func:`api_exception_handler`, which is wired in ``REST_FRAMEWORK``.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class BackofficeError(Exception):
    """Base exception for back office operations."""

    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The operation could not be completed."

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class WithoutPermission(BackofficeError):
    """Raised when the caller cannot be resolved or lacks the required role."""

    code = "without_permission"
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."


class NotFound(BackofficeError):
    """Raised when a referenced customer, order or product does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."


class InvalidParams(BackofficeError):
    """Raised for malformed input."""

    code = "invalid_params"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid parameters."


class InsufficientStock(BackofficeError):
    """Raised when an order asks for more units than the catalog holds."""

    code = "insufficient_stock"
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Insufficient stock."

    def __init__(self, product_id, available, requested):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Available: {available}, Requested: {requested}"
        )


class RepositoryError(BackofficeError):
    """
    Raised when the storage layer rejects a statement.

    The native database exception is kept as ``original`` and chained
    as ``__cause__``.
    """

    code = "repository_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "The storage layer rejected the operation."

    def __init__(self, original, detail=None):
        self.original = original
        super().__init__(detail or f"{self.default_detail} {original}")


def api_exception_handler(exc, context):
    """
    Map back office errors to JSON responses and defer everything else to DRF.
    """
    if isinstance(exc, BackofficeError):
        if isinstance(exc, RepositoryError):
            logger.error("Repository error in %s: %s", context.get("view"), exc.original)
        set_rollback()
        return Response({"detail": exc.detail, "code": exc.code}, status=exc.status_code)

    return exception_handler(exc, context)
