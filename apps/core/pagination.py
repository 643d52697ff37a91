"""
Pagination utilities for service-level list operations.

Pages are 1-indexed. Unlike Django's Paginator, a page past the end yields
an empty list instead of being clamped to the last page, so callers can
tell they walked off the end.
"""

from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db.models import QuerySet

from .exceptions import InvalidParams


def get_offset(page: int, items_per_page: int) -> int:
    """Return the row offset for a 1-indexed page."""
    if page <= 1:
        return 0
    return (page - 1) * items_per_page


def parse_page_params(
    page: Optional[Any] = None,
    items_per_page: Optional[Any] = None,
) -> Dict[str, int]:
    """
    Validate page and page-size values coming from callers.

    Args:
        page: Requested page (defaults to 1)
        items_per_page: Requested page size (defaults to ORDERS_DEFAULT_PAGE_SIZE)

    Returns:
        Dictionary with integer ``page`` and ``items_per_page``

    Raises:
        InvalidParams: If either value is not a positive integer or the page
            size exceeds ORDERS_MAX_PAGE_SIZE
    """
    if page is None:
        page = 1
    if items_per_page is None:
        items_per_page = settings.ORDERS_DEFAULT_PAGE_SIZE

    try:
        page = int(page)
        items_per_page = int(items_per_page)
    except (ValueError, TypeError):
        raise InvalidParams("page and items_per_page must be integers.")

    if page < 1 or items_per_page < 1:
        raise InvalidParams("page and items_per_page must be at least 1.")

    if items_per_page > settings.ORDERS_MAX_PAGE_SIZE:
        raise InvalidParams(f"items_per_page cannot exceed {settings.ORDERS_MAX_PAGE_SIZE}.")

    return {"page": page, "items_per_page": items_per_page}


def paginate_queryset(queryset: QuerySet, page: int, items_per_page: int) -> Dict[str, Any]:
    """
    Slice a queryset into one page.

    Returns:
        Dictionary with ``items`` (list), ``total``, ``page`` and ``items_per_page``
    """
    offset = get_offset(page, items_per_page)
    items: List[Any] = list(queryset[offset : offset + items_per_page])

    return {
        "items": items,
        "total": queryset.count(),
        "page": page,
        "items_per_page": items_per_page,
    }
