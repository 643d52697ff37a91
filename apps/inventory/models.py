"""
Inventory models for the retail back office.

The catalog holds the current price, cost price and available quantity of
every product. Orders read these values at sale time and keep their own
copies, so later catalog edits never rewrite sales history.
"""

import uuid

from django.db import models


class Category(models.Model):
    """
    Product categories for organizing the catalog.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the category",
    )

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text="Category name",
    )

    description = models.TextField(
        blank=True,
        help_text="Optional description of the category",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "inventory_categories"
        ordering = ["name"]
        verbose_name = "Category"
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name


class Brand(models.Model):
    """Product brand."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the brand",
    )

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text="Brand name",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "inventory_brands"
        ordering = ["name"]
        verbose_name = "Brand"
        verbose_name_plural = "Brands"

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    Catalog entry.

    Prices are integers in minor currency units (cents). The available
    quantity is signed: the default stock policy lets it go negative when
    more units are sold than were on hand.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the product",
    )

    name = models.CharField(
        max_length=255,
        unique=True,
        help_text="Product name",
    )

    barcode = models.CharField(
        max_length=100,
        unique=True,
        null=True,
        blank=True,
        help_text="Barcode (EAN, UPC, etc.)",
    )

    description = models.TextField(
        blank=True,
        help_text="Optional product description",
    )

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        help_text="Category this product belongs to",
    )

    brand = models.ForeignKey(
        Brand,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        help_text="Brand of this product",
    )

    # Pricing, in minor currency units
    price = models.BigIntegerField(
        default=0,
        help_text="Current selling price in cents",
    )

    cost_price = models.BigIntegerField(
        default=0,
        help_text="Current cost price in cents",
    )

    # Stock
    available_quantity = models.IntegerField(
        default=0,
        help_text="Units currently available (may be negative)",
    )

    minimum_quantity = models.IntegerField(
        default=0,
        help_text="Minimum quantity threshold for low stock alerts",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "inventory_products"
        ordering = ["name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"
        indexes = [
            models.Index(fields=["category"], name="product_category_idx"),
            models.Index(fields=["brand"], name="product_brand_idx"),
            models.Index(
                fields=["available_quantity", "minimum_quantity"],
                name="product_low_stock_idx",
            ),
        ]

    def __str__(self):
        return self.name
