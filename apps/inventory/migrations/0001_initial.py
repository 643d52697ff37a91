import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Brand",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the brand",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(help_text="Brand name", max_length=100, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Brand",
                "verbose_name_plural": "Brands",
                "db_table": "inventory_brands",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the category",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(help_text="Category name", max_length=100, unique=True)),
                (
                    "description",
                    models.TextField(blank=True, help_text="Optional description of the category"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Category",
                "verbose_name_plural": "Categories",
                "db_table": "inventory_categories",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the product",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(help_text="Product name", max_length=255, unique=True)),
                (
                    "barcode",
                    models.CharField(
                        blank=True,
                        help_text="Barcode (EAN, UPC, etc.)",
                        max_length=100,
                        null=True,
                        unique=True,
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, help_text="Optional product description"),
                ),
                (
                    "price",
                    models.BigIntegerField(default=0, help_text="Current selling price in cents"),
                ),
                (
                    "cost_price",
                    models.BigIntegerField(default=0, help_text="Current cost price in cents"),
                ),
                (
                    "available_quantity",
                    models.IntegerField(
                        default=0, help_text="Units currently available (may be negative)"
                    ),
                ),
                (
                    "minimum_quantity",
                    models.IntegerField(
                        default=0, help_text="Minimum quantity threshold for low stock alerts"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "brand",
                    models.ForeignKey(
                        blank=True,
                        help_text="Brand of this product",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="inventory.brand",
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        help_text="Category this product belongs to",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="inventory.category",
                    ),
                ),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "db_table": "inventory_products",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["category"], name="product_category_idx"),
                    models.Index(fields=["brand"], name="product_brand_idx"),
                    models.Index(
                        fields=["available_quantity", "minimum_quantity"],
                        name="product_low_stock_idx",
                    ),
                ],
            },
        ),
    ]
