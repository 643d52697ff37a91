import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import django_fsm
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the customer",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(help_text="Customer's full name", max_length=200)),
                (
                    "email",
                    models.EmailField(
                        blank=True, help_text="Customer's email address", max_length=254
                    ),
                ),
                (
                    "phone",
                    models.CharField(blank=True, help_text="Customer's phone number", max_length=20),
                ),
                (
                    "document",
                    models.CharField(
                        blank=True, help_text="Tax or identity document number", max_length=30
                    ),
                ),
                ("zipcode", models.CharField(blank=True, max_length=20)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("street", models.CharField(blank=True, max_length=200)),
                ("neighborhood", models.CharField(blank=True, max_length=100)),
                ("complement", models.CharField(blank=True, max_length=200)),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, help_text="When the customer was created"),
                ),
            ],
            options={
                "verbose_name": "Customer",
                "verbose_name_plural": "Customers",
                "db_table": "sales_customers",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["name"], name="cust_name_idx"),
                    models.Index(fields=["phone"], name="cust_phone_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the order",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "total_price",
                    models.BigIntegerField(
                        default=0, help_text="Σ custom product price × quantity over the line items"
                    ),
                ),
                (
                    "total_cost_price",
                    models.BigIntegerField(
                        default=0, help_text="Σ product cost price × quantity over the line items"
                    ),
                ),
                (
                    "draft",
                    models.BooleanField(
                        default=False,
                        help_text="Budget/quote that is not a committed sale; excluded from sales reports",
                    ),
                ),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=[
                            ("pending", "Pending"),
                            ("in_progress", "In Progress"),
                            ("finished", "Finished"),
                            ("delivered", "Delivered"),
                        ],
                        default="pending",
                        help_text="Current fulfillment status",
                        max_length=50,
                    ),
                ),
                ("obs", models.TextField(blank=True, help_text="Free-text notes about the order")),
                ("zipcode", models.CharField(blank=True, max_length=20)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("street", models.CharField(blank=True, max_length=200)),
                ("neighborhood", models.CharField(blank=True, max_length=100)),
                ("complement", models.CharField(blank=True, max_length=200)),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                        help_text="When the order was created",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        help_text="Customer who placed the order (optional for walk-in sales)",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="sales.customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["draft", "-created_at"], name="order_draft_date_idx"),
                    models.Index(fields=["customer", "-created_at"], name="order_cust_date_idx"),
                    models.Index(fields=["status"], name="order_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderLineItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the line item",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        help_text="Units sold",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("product_price", models.BigIntegerField(help_text="Catalog price at time of sale")),
                (
                    "product_cost_price",
                    models.BigIntegerField(help_text="Catalog cost price at time of sale"),
                ),
                (
                    "custom_product_price",
                    models.BigIntegerField(help_text="Price actually charged per unit"),
                ),
                ("obs", models.TextField(blank=True, help_text="Optional note for this line")),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order that this line item belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="sales.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        help_text="Product sold (kept as NULL if the product is later deleted)",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_line_items",
                        to="inventory.product",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order Line Item",
                "verbose_name_plural": "Order Line Items",
                "db_table": "order_line_items",
                "indexes": [
                    models.Index(fields=["order"], name="lineitem_order_idx"),
                    models.Index(fields=["product"], name="lineitem_product_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("order", "product"), name="unique_order_product"
                    )
                ],
            },
        ),
    ]
