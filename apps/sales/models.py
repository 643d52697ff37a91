"""
Sales models for the retail back office.

An Order and its OrderLineItems are written once, in a single transaction,
by the order fulfillment service. Each line item keeps the catalog price and
cost price as they were at the moment of sale, next to the price actually
charged, so margin accounting never depends on today's catalog.

After creation only the order status and the shipping address change.
"""

import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from django_fsm import RETURN_VALUE, FSMField, transition

from apps.inventory.models import Product


class Customer(models.Model):
    """
    Customer record referenced by orders.

    Customer CRUD lives outside the order core; orders only need to know
    whether a customer exists and how to show it.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the customer",
    )

    name = models.CharField(
        max_length=200,
        help_text="Customer's full name",
    )

    email = models.EmailField(
        blank=True,
        help_text="Customer's email address",
    )

    phone = models.CharField(
        max_length=20,
        blank=True,
        help_text="Customer's phone number",
    )

    document = models.CharField(
        max_length=30,
        blank=True,
        help_text="Tax or identity document number",
    )

    # Default shipping address
    zipcode = models.CharField(max_length=20, blank=True)
    city = models.CharField(max_length=100, blank=True)
    street = models.CharField(max_length=200, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    complement = models.CharField(max_length=200, blank=True)

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the customer was created",
    )

    class Meta:
        db_table = "sales_customers"
        ordering = ["name"]
        verbose_name = "Customer"
        verbose_name_plural = "Customers"
        indexes = [
            models.Index(fields=["name"], name="cust_name_idx"),
            models.Index(fields=["phone"], name="cust_phone_idx"),
        ]

    def __str__(self):
        return self.name


class Order(models.Model):
    """
    A committed sale, or a budget when ``draft`` is set.

    Totals are sums over the line items:
    - total_price = Σ custom_product_price × quantity
    - total_cost_price = Σ product_cost_price × quantity

    Status workflow:
    pending → in_progress → finished → delivered
    Transitions are not restricted; any status can be set from any other.
    """

    # Status choices for FSM
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    DELIVERED = "delivered"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (IN_PROGRESS, "In Progress"),
        (FINISHED, "Finished"),
        (DELIVERED, "Delivered"),
    ]

    STATUSES = [PENDING, IN_PROGRESS, FINISHED, DELIVERED]

    SHIPPING_FIELDS = ["zipcode", "city", "street", "neighborhood", "complement"]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the order",
    )

    customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        help_text="Customer who placed the order (optional for walk-in sales)",
    )

    # Totals, in minor currency units
    total_price = models.BigIntegerField(
        default=0,
        help_text="Σ custom product price × quantity over the line items",
    )

    total_cost_price = models.BigIntegerField(
        default=0,
        help_text="Σ product cost price × quantity over the line items",
    )

    draft = models.BooleanField(
        default=False,
        help_text="Budget/quote that is not a committed sale; excluded from sales reports",
    )

    status = FSMField(
        default=PENDING,
        choices=STATUS_CHOICES,
        help_text="Current fulfillment status",
    )

    obs = models.TextField(
        blank=True,
        help_text="Free-text notes about the order",
    )

    # Shipping address
    zipcode = models.CharField(max_length=20, blank=True)
    city = models.CharField(max_length=100, blank=True)
    street = models.CharField(max_length=200, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    complement = models.CharField(max_length=200, blank=True)

    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        db_index=True,
        help_text="When the order was created",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        verbose_name = "Order"
        verbose_name_plural = "Orders"
        indexes = [
            models.Index(fields=["draft", "-created_at"], name="order_draft_date_idx"),
            models.Index(fields=["customer", "-created_at"], name="order_cust_date_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    def __str__(self):
        return f"{self.id} - {self.total_price}"

    @transition(field=status, source="*", target=RETURN_VALUE(*STATUSES))
    def change_status(self, new_status):
        """
        Move the order to ``new_status``.

        The transition accepts every source state. Narrow ``source`` to
        enforce a forward-only workflow.
        """
        return new_status

    def calculate_totals(self):
        """
        Recompute both totals from the stored line items.

        Returns:
            Tuple of (total_price, total_cost_price)
        """
        total_price = 0
        total_cost_price = 0
        for item in self.line_items.all():
            total_price += item.custom_product_price * item.quantity
            total_cost_price += item.product_cost_price * item.quantity
        return total_price, total_cost_price

    @property
    def profit(self):
        return self.total_price - self.total_cost_price


class OrderLineItem(models.Model):
    """
    One product in an order, with the prices captured at sale time.

    - product_price: catalog price when the order was created
    - product_cost_price: catalog cost price when the order was created
    - custom_product_price: price actually charged (manual discount or markup)

    Line items are never edited after the order is created.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the line item",
    )

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="line_items",
        help_text="Order that this line item belongs to",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_line_items",
        help_text="Product sold (kept as NULL if the product is later deleted)",
    )

    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Units sold",
    )

    product_price = models.BigIntegerField(
        help_text="Catalog price at time of sale",
    )

    product_cost_price = models.BigIntegerField(
        help_text="Catalog cost price at time of sale",
    )

    custom_product_price = models.BigIntegerField(
        help_text="Price actually charged per unit",
    )

    obs = models.TextField(
        blank=True,
        help_text="Optional note for this line",
    )

    class Meta:
        db_table = "order_line_items"
        verbose_name = "Order Line Item"
        verbose_name_plural = "Order Line Items"
        constraints = [
            models.UniqueConstraint(fields=["order", "product"], name="unique_order_product"),
        ]
        indexes = [
            models.Index(fields=["order"], name="lineitem_order_idx"),
            models.Index(fields=["product"], name="lineitem_product_idx"),
        ]

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"

    @property
    def subtotal(self):
        """Amount charged for this line."""
        return self.custom_product_price * self.quantity
