"""
Django admin configuration for sales models.
"""

from django.contrib import admin

from .models import Customer, Order, OrderLineItem


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for Customer model."""

    list_display = ["name", "email", "phone", "document", "created_at"]
    search_fields = ["name", "email", "phone", "document"]
    readonly_fields = ["id", "created_at"]


class OrderLineItemInline(admin.TabularInline):
    """Inline admin for OrderLineItem model. Line items are read-only after sale."""

    model = OrderLineItem
    extra = 0
    can_delete = False
    readonly_fields = [
        "product",
        "quantity",
        "product_price",
        "product_cost_price",
        "custom_product_price",
        "obs",
    ]
    fields = readonly_fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for Order model."""

    list_display = ["id", "customer", "total_price", "total_cost_price", "status", "draft", "created_at"]
    list_filter = ["status", "draft", "created_at"]
    search_fields = ["id", "customer__name"]
    readonly_fields = ["id", "customer", "total_price", "total_cost_price", "draft", "created_at"]
    date_hierarchy = "created_at"
    inlines = [OrderLineItemInline]
    fieldsets = [
        (
            "Order",
            {
                "fields": ["id", "customer", "status", "draft", "obs", "created_at"],
            },
        ),
        (
            "Totals",
            {
                "fields": ["total_price", "total_cost_price"],
            },
        ),
        (
            "Shipping Address",
            {
                "fields": ["zipcode", "city", "street", "neighborhood", "complement"],
            },
        ),
    ]
