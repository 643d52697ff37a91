"""
Admin configuration for inventory models.
"""

from django.contrib import admin

from .models import Brand, Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin interface for Category."""

    list_display = ["name", "created_at"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    """Admin interface for Brand."""

    list_display = ["name", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product."""

    list_display = [
        "name",
        "barcode",
        "category",
        "brand",
        "price",
        "cost_price",
        "available_quantity",
    ]
    list_filter = [
        "category",
        "brand",
        "created_at",
    ]
    search_fields = [
        "name",
        "barcode",
        "description",
    ]
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "barcode", "category", "brand", "description"),
            },
        ),
        (
            "Pricing",
            {
                "fields": ("price", "cost_price"),
            },
        ),
        (
            "Stock",
            {
                "fields": ("available_quantity", "minimum_quantity"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )
