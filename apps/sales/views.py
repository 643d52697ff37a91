"""
REST views for orders.

Views authenticate the request, check the payload shape with the serializers
and hand the work to OrderService with the caller's user id. Service errors
are rendered by ``apps.core.exceptions.api_exception_handler``.
"""

import datetime

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import InvalidParams
from apps.core.permissions import HasRoleLevel

from .serializers import (
    OrderCreateSerializer,
    OrderDetailSerializer,
    OrderListSerializer,
    OrderStatusSerializer,
    ShippingAddressSerializer,
)
from .services import OrderService

TRUE_VALUES = {"true", "1", "yes"}
FALSE_VALUES = {"false", "0", "no"}


def parse_bool_param(value, name):
    if value is None or value == "":
        return None
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise InvalidParams(f"{name} must be true or false.")


def parse_datetime_param(value, name, end_of_day=False):
    """
    Parse an ISO date or datetime query parameter.

    A bare date covers the whole day: its start for lower bounds and its
    last microsecond for upper bounds, in the current timezone.
    """
    if not value:
        return None

    try:
        parsed = parse_datetime(value)
        day = parse_date(value) if parsed is None else None
    except ValueError:
        # Well formed but not a real date, e.g. 2024-02-30
        parsed = day = None

    if parsed is None:
        if day is None:
            raise InvalidParams(f"{name} must be an ISO date or datetime.")
        bound = datetime.time.max if end_of_day else datetime.time.min
        parsed = datetime.datetime.combine(day, bound)

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


class OrderListCreateView(APIView):
    """
    GET: list orders, newest first.
    POST: create an order.

    Query parameters for GET:
    - customer: Filter by customer id
    - draft: true/false
    - date_from: Lower bound on created_at (YYYY-MM-DD or ISO datetime)
    - date_to: Upper bound on created_at (YYYY-MM-DD or ISO datetime)
    - search: Substring of the customer name
    - page, items_per_page: 1-indexed pagination
    """

    permission_classes = [permissions.IsAuthenticated, HasRoleLevel]

    def get(self, request):
        params = request.query_params
        result = OrderService().list_orders(
            request.user.pk,
            customer_id=params.get("customer") or None,
            draft=parse_bool_param(params.get("draft"), "draft"),
            start_date=parse_datetime_param(params.get("date_from"), "date_from"),
            end_date=parse_datetime_param(params.get("date_to"), "date_to", end_of_day=True),
            search=params.get("search") or None,
            page=params.get("page"),
            items_per_page=params.get("items_per_page"),
        )

        return Response(
            {
                "orders": OrderListSerializer(result["orders"], many=True).data,
                "total": result["total"],
                "page": result["page"],
                "items_per_page": result["items_per_page"],
            },
            status=status.HTTP_200_OK,
        )

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        service = OrderService()
        order = service.create_order(
            request.user.pk,
            data["line_items"],
            customer_id=data.get("customer_id"),
            shipping=data.get("shipping"),
            obs=data.get("obs", ""),
            draft=data.get("draft", False),
        )

        # Re-read so the response carries customer and line item details
        order = service.get_order(request.user.pk, order.pk)
        return Response(OrderDetailSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """
    GET: order with customer and line items, sale-time and current prices.
    DELETE: delete the order and put its units back in stock.
    """

    permission_classes = [permissions.IsAuthenticated, HasRoleLevel]

    def get(self, request, order_id):
        order = OrderService().get_order(request.user.pk, order_id)
        return Response(OrderDetailSerializer(order).data, status=status.HTTP_200_OK)

    def delete(self, request, order_id):
        OrderService().delete_order(request.user.pk, order_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(["PATCH"])
@permission_classes([permissions.IsAuthenticated, HasRoleLevel])
def order_update_status(request, order_id):
    """Change the status of an order."""
    serializer = OrderStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    order = OrderService().update_order_status(
        request.user.pk, order_id, serializer.validated_data["status"]
    )
    return Response({"id": str(order.pk), "status": order.status}, status=status.HTTP_200_OK)


@api_view(["PATCH"])
@permission_classes([permissions.IsAuthenticated, HasRoleLevel])
def order_update_shipping(request, order_id):
    """Update the shipping address of an order."""
    serializer = ShippingAddressSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    order = OrderService().update_shipping_address(
        request.user.pk, order_id, **serializer.validated_data
    )
    return Response(
        ShippingAddressSerializer(order).data,
        status=status.HTTP_200_OK,
    )
