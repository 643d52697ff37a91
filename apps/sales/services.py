"""
Order services for the retail back office.

- Order fulfillment: merge line items, lock and decrement stock, snapshot
  prices and persist the order with its line items in one transaction
- Order retrieval and listing with filters and pagination
- Status changes and shipping address updates
- Order deletion with stock restoration

Every public method starts with the access gate and raises one of the
errors from :mod:`apps.core.exceptions` on failure.
"""

import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional

from django.db import DatabaseError, transaction

from django_fsm import TransitionNotAllowed

from apps.core.access import require_role
from apps.core.exceptions import InvalidParams, NotFound, RepositoryError
from apps.core.models import RoleLevel
from apps.core.pagination import paginate_queryset, parse_page_params
from apps.inventory.catalog import (
    decrement_available_quantity,
    get_products_by_ids,
    restore_available_quantity,
)

from .models import Customer, Order, OrderLineItem

logger = logging.getLogger(__name__)


def parse_id(value) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it cannot be one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def _validate_quantity(quantity) -> int:
    # bool is an int subclass; True must not count as one unit
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidParams(f"Quantity must be a positive integer, got {quantity!r}.")
    return quantity


def _validate_custom_price(price) -> Optional[int]:
    if price is None:
        return None
    if isinstance(price, bool) or not isinstance(price, int) or price < 0:
        raise InvalidParams(f"Custom price must be a non-negative integer, got {price!r}.")
    return price


def merge_line_items(line_items: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Collapse requested line items so each product appears once.

    Quantities of repeated products are summed. The merged list keeps the
    order in which each product first appeared, and the first occurrence's
    ``custom_price`` and ``obs`` are kept.

    Raises:
        InvalidParams: If the list is empty or a quantity/price is malformed
        NotFound: If a product id cannot be a valid id
    """
    merged: Dict[uuid.UUID, Dict[str, Any]] = {}

    for item in line_items:
        product_id = parse_id(item.get("product_id"))
        if product_id is None:
            raise NotFound(f"Product {item.get('product_id')!r} not found.")

        quantity = _validate_quantity(item.get("quantity"))
        custom_price = _validate_custom_price(item.get("custom_price"))

        existing = merged.get(product_id)
        if existing:
            existing["quantity"] += quantity
        else:
            merged[product_id] = {
                "product_id": product_id,
                "quantity": quantity,
                "custom_price": custom_price,
                "obs": item.get("obs") or "",
            }

    if not merged:
        raise InvalidParams("At least one line item is required.")

    return list(merged.values())


class OrderService:
    """
    Order fulfillment, retrieval and lifecycle operations.
    """

    def get_customer(self, customer_id) -> Customer:
        """Fetch a customer or raise NotFound."""
        parsed = parse_id(customer_id)
        customer = Customer.objects.filter(pk=parsed).first() if parsed else None
        if customer is None:
            raise NotFound(f"Customer {customer_id} not found.")
        return customer

    def clean_shipping(self, shipping: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """
        Keep only known shipping fields.

        Raises:
            InvalidParams: If an unknown field name is supplied
        """
        if not shipping:
            return {}

        unknown = set(shipping) - set(Order.SHIPPING_FIELDS)
        if unknown:
            raise InvalidParams(f"Unknown shipping fields: {', '.join(sorted(unknown))}.")

        return {field: value or "" for field, value in shipping.items()}

    def create_order(
        self,
        caller_id,
        line_items: Iterable[Mapping[str, Any]],
        customer_id=None,
        shipping: Optional[Mapping[str, Any]] = None,
        obs: str = "",
        draft: bool = False,
    ) -> Order:
        """
        Create an order and take its products out of stock, atomically.

        Args:
            caller_id: Id of the user placing the order
            line_items: Mappings with ``product_id`` and ``quantity``, and
                optionally ``custom_price`` (per-unit price to charge) and ``obs``
            customer_id: Optional customer reference
            shipping: Optional shipping address fields
            obs: Free-text notes
            draft: Save as a budget instead of a committed sale

        Returns:
            The persisted Order

        Raises:
            WithoutPermission: Unknown caller
            NotFound: Missing customer or product; nothing is written
            InvalidParams: Empty or malformed line items
            InsufficientStock: Stock would go negative and the policy forbids it
            RepositoryError: The database rejected a statement
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        customer = self.get_customer(customer_id) if customer_id is not None else None
        merged = merge_line_items(line_items)
        shipping_fields = self.clean_shipping(shipping)

        try:
            with transaction.atomic():
                products = get_products_by_ids([item["product_id"] for item in merged], lock=True)

                missing = [str(item["product_id"]) for item in merged if item["product_id"] not in products]
                if missing:
                    raise NotFound(f"Products not found: {', '.join(missing)}.")

                total_price = 0
                total_cost_price = 0
                line_rows = []

                for item in merged:
                    product = products[item["product_id"]]
                    quantity = item["quantity"]

                    decrement_available_quantity(product, quantity)

                    custom_price = item["custom_price"]
                    if custom_price is None:
                        custom_price = product.price

                    line_rows.append(
                        OrderLineItem(
                            product=product,
                            quantity=quantity,
                            product_price=product.price,
                            product_cost_price=product.cost_price,
                            custom_product_price=custom_price,
                            obs=item["obs"],
                        )
                    )
                    total_price += custom_price * quantity
                    total_cost_price += product.cost_price * quantity

                order = Order.objects.create(
                    customer=customer,
                    total_price=total_price,
                    total_cost_price=total_cost_price,
                    draft=bool(draft),
                    obs=obs or "",
                    **shipping_fields,
                )

                for row in line_rows:
                    row.order = order
                OrderLineItem.objects.bulk_create(line_rows)

        except DatabaseError as exc:
            logger.error("Order creation rolled back by the database", exc_info=True)
            raise RepositoryError(exc) from exc

        logger.info(
            "Order %s created with %d line items (total=%s, draft=%s)",
            order.pk,
            len(line_rows),
            order.total_price,
            order.draft,
        )
        return order

    def list_orders(
        self,
        caller_id,
        customer_id=None,
        draft: Optional[bool] = None,
        start_date=None,
        end_date=None,
        search: Optional[str] = None,
        page=None,
        items_per_page=None,
    ) -> Dict[str, Any]:
        """
        List orders, newest first.

        Returns:
            Dictionary with ``orders``, ``total``, ``page`` and ``items_per_page``

        Raises:
            WithoutPermission: Unknown caller
            NotFound: ``customer_id`` given but no such customer
            InvalidParams: Bad pagination values
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        paging = parse_page_params(page, items_per_page)
        queryset = Order.objects.select_related("customer").order_by("-created_at", "-id")

        if customer_id is not None:
            customer = self.get_customer(customer_id)
            queryset = queryset.filter(customer=customer)

        if draft is not None:
            queryset = queryset.filter(draft=draft)

        if start_date is not None:
            queryset = queryset.filter(created_at__gte=start_date)

        if end_date is not None:
            queryset = queryset.filter(created_at__lte=end_date)

        if search:
            queryset = queryset.filter(customer__name__contains=search)

        result = paginate_queryset(queryset, paging["page"], paging["items_per_page"])

        return {
            "orders": result["items"],
            "total": result["total"],
            "page": result["page"],
            "items_per_page": result["items_per_page"],
        }

    def get_order(self, caller_id, order_id) -> Order:
        """
        Fetch one order with its customer, line items and their current products.

        Raises:
            WithoutPermission: Unknown caller
            NotFound: No such order
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        parsed = parse_id(order_id)
        order = None
        if parsed:
            order = (
                Order.objects.select_related("customer")
                .prefetch_related("line_items__product")
                .filter(pk=parsed)
                .first()
            )

        if order is None:
            raise NotFound(f"Order {order_id} not found.")

        return order

    def _lock_order(self, order_id) -> Order:
        parsed = parse_id(order_id)
        order = Order.objects.select_for_update().filter(pk=parsed).first() if parsed else None
        if order is None:
            raise NotFound(f"Order {order_id} not found.")
        return order

    def update_order_status(self, caller_id, order_id, new_status: str) -> Order:
        """
        Set the order status. Line items, totals and stock are untouched.

        Raises:
            WithoutPermission: Unknown caller
            NotFound: No such order
            InvalidParams: ``new_status`` is not a known status
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        if new_status not in Order.STATUSES:
            raise InvalidParams(f"Unknown order status {new_status!r}.")

        with transaction.atomic():
            order = self._lock_order(order_id)
            previous = order.status

            try:
                order.change_status(new_status)
            except TransitionNotAllowed as exc:
                raise InvalidParams(str(exc)) from exc

            order.save(update_fields=["status"])

        logger.info("Order %s status changed from %s to %s", order.pk, previous, new_status)
        return order

    def update_shipping_address(self, caller_id, order_id, **fields) -> Order:
        """
        Update the shipping address of an order.

        Raises:
            WithoutPermission: Unknown caller
            NotFound: No such order
            InvalidParams: Unknown field name or nothing to update
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        shipping_fields = self.clean_shipping(fields)
        if not shipping_fields:
            raise InvalidParams("No shipping fields to update.")

        with transaction.atomic():
            order = self._lock_order(order_id)
            for field, value in shipping_fields.items():
                setattr(order, field, value)
            order.save(update_fields=list(shipping_fields))

        logger.info("Order %s shipping address updated (%s)", order.pk, ", ".join(shipping_fields))
        return order

    def delete_order(self, caller_id, order_id) -> None:
        """
        Delete an order and its line items, putting their units back in stock.

        Line items whose product has since been deleted are skipped.

        Raises:
            WithoutPermission: Unknown caller
            NotFound: No such order
            RepositoryError: The database rejected a statement
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        try:
            with transaction.atomic():
                order = self._lock_order(order_id)
                line_items = list(order.line_items.all())

                products = get_products_by_ids(
                    [item.product_id for item in line_items if item.product_id], lock=True
                )

                for item in line_items:
                    product = products.get(item.product_id)
                    if product is None:
                        continue
                    restore_available_quantity(product, item.quantity)

                order_pk = order.pk
                order.delete()

        except DatabaseError as exc:
            logger.error("Order deletion rolled back by the database", exc_info=True)
            raise RepositoryError(exc) from exc

        logger.info("Order %s deleted, %d line items restocked", order_pk, len(line_items))
