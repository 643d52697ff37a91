"""
Serializers for sales app.

Input serializers only check request shape; business rules (customer and
product existence, stock policy, access) are enforced by OrderService.
"""

from rest_framework import serializers

from .models import Customer, Order, OrderLineItem


class LineItemInputSerializer(serializers.Serializer):
    """One requested line item."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    custom_price = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    obs = serializers.CharField(required=False, allow_blank=True, default="")


class ShippingAddressSerializer(serializers.Serializer):
    """Shipping address fields; all optional."""

    zipcode = serializers.CharField(max_length=20, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    street = serializers.CharField(max_length=200, required=False, allow_blank=True)
    neighborhood = serializers.CharField(max_length=100, required=False, allow_blank=True)
    complement = serializers.CharField(max_length=200, required=False, allow_blank=True)


class OrderCreateSerializer(serializers.Serializer):
    """
    Payload for creating an order.

    Repeated products in ``line_items`` are merged by the service.
    """

    customer_id = serializers.UUIDField(required=False, allow_null=True)
    line_items = LineItemInputSerializer(many=True)
    shipping = ShippingAddressSerializer(required=False)
    obs = serializers.CharField(required=False, allow_blank=True, default="")
    draft = serializers.BooleanField(required=False, default=False)

    def validate_line_items(self, value):
        """Validate that at least one item is provided."""
        if not value:
            raise serializers.ValidationError("At least one line item is required.")
        return value


class OrderStatusSerializer(serializers.Serializer):
    """Payload for changing the order status."""

    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class CustomerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone", "document"]


class OrderListSerializer(serializers.ModelSerializer):
    """Serializer for order list."""

    customer = CustomerSummarySerializer(read_only=True)
    profit = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "total_price",
            "total_cost_price",
            "profit",
            "draft",
            "status",
            "obs",
            "created_at",
        ]


class OrderLineItemDetailSerializer(serializers.ModelSerializer):
    """
    Line item with its sale-time prices next to the product's current ones.

    ``name``, ``barcode`` and the current prices are null once the product
    has been deleted from the catalog.
    """

    product_id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(source="product.name", read_only=True, default=None)
    barcode = serializers.CharField(source="product.barcode", read_only=True, default=None)
    price = serializers.IntegerField(source="product_price", read_only=True)
    cost_price = serializers.IntegerField(source="product_cost_price", read_only=True)
    custom_price = serializers.IntegerField(source="custom_product_price", read_only=True)
    current_price = serializers.IntegerField(source="product.price", read_only=True, default=None)
    current_cost_price = serializers.IntegerField(
        source="product.cost_price", read_only=True, default=None
    )
    subtotal = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderLineItem
        fields = [
            "id",
            "product_id",
            "name",
            "barcode",
            "quantity",
            "price",
            "cost_price",
            "custom_price",
            "current_price",
            "current_cost_price",
            "subtotal",
            "obs",
        ]


class OrderDetailSerializer(serializers.ModelSerializer):
    """Serializer for order details."""

    customer = CustomerSummarySerializer(read_only=True)
    line_items = OrderLineItemDetailSerializer(many=True, read_only=True)
    profit = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "line_items",
            "total_price",
            "total_cost_price",
            "profit",
            "draft",
            "status",
            "obs",
            "zipcode",
            "city",
            "street",
            "neighborhood",
            "complement",
            "created_at",
        ]
