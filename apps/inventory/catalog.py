"""
Catalog accessor used by order fulfillment.

Reads current product prices and quantities in one batch and writes
quantity changes back. Callers that change quantities must run inside
``transaction.atomic()`` and fetch the rows with ``lock=True`` so the
read-modify-write happens under a row lock.
"""

import logging
from typing import Dict, Iterable
from uuid import UUID

from django.conf import settings
from django.db.models import QuerySet

from apps.core.exceptions import InsufficientStock

from .models import Product

logger = logging.getLogger(__name__)


def products_queryset(product_ids: Iterable[UUID], lock: bool = False) -> QuerySet:
    """
    Queryset of the catalog rows for ``product_ids``.

    With ``lock`` the rows are read ``SELECT ... FOR UPDATE`` in primary-key
    order, so concurrent orders never wait on each other in a cycle. Locking
    requires an open transaction.
    """
    queryset = Product.objects.filter(pk__in=list(product_ids))

    if lock:
        queryset = queryset.select_for_update().order_by("pk")

    return queryset


def get_products_by_ids(product_ids: Iterable[UUID], lock: bool = False) -> Dict[UUID, Product]:
    """
    Fetch catalog rows for a set of product ids in one query.

    Args:
        product_ids: Product ids to look up
        lock: Take row locks, see :func:`products_queryset`

    Returns:
        Mapping of product id to Product. Ids without a row are simply absent.
    """
    return {product.pk: product for product in products_queryset(product_ids, lock=lock)}


def compute_remaining_quantity(product: Product, quantity: int) -> int:
    """
    Stock policy: the quantity left after taking ``quantity`` units.

    With ``INVENTORY_ALLOW_NEGATIVE_STOCK`` on (the default) the result is
    not clamped and may be negative.

    Raises:
        InsufficientStock: If negative stock is disallowed and not enough units remain
    """
    remaining = product.available_quantity - quantity

    if remaining < 0:
        if not settings.INVENTORY_ALLOW_NEGATIVE_STOCK:
            raise InsufficientStock(product.pk, product.available_quantity, quantity)
        logger.warning(
            "Product %s goes negative: available %s, requested %s",
            product.pk,
            product.available_quantity,
            quantity,
        )

    return remaining


def decrement_available_quantity(product: Product, quantity: int) -> Product:
    """Take ``quantity`` units out of stock and persist the new value."""
    product.available_quantity = compute_remaining_quantity(product, quantity)
    product.save(update_fields=["available_quantity", "updated_at"])
    return product


def restore_available_quantity(product: Product, quantity: int) -> Product:
    """Put ``quantity`` units back into stock and persist the new value."""
    product.available_quantity += quantity
    product.save(update_fields=["available_quantity", "updated_at"])
    return product
