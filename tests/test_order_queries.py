"""
Tests for order listing, filtering, pagination and detail retrieval.
"""

import uuid
from datetime import timedelta

from django.utils import timezone

import pytest

from apps.core.exceptions import InvalidParams, NotFound, WithoutPermission
from apps.core.pagination import get_offset
from apps.sales.models import Customer, Order
from apps.sales.serializers import OrderDetailSerializer
from apps.sales.services import OrderService


def place_order(user, product, quantity=1, created_at=None, **kwargs):
    """Create an order through the service, optionally backdating it."""
    order = OrderService().create_order(
        user.pk, [{"product_id": product.pk, "quantity": quantity}], **kwargs
    )
    if created_at is not None:
        Order.objects.filter(pk=order.pk).update(created_at=created_at)
        order.refresh_from_db()
    return order


@pytest.mark.parametrize(
    "page,items_per_page,expected",
    [(1, 15, 0), (2, 15, 15), (3, 2, 4), (0, 10, 0)],
)
def test_get_offset(page, items_per_page, expected):
    assert get_offset(page, items_per_page) == expected


@pytest.mark.django_db
class TestListOrders:
    """Test OrderService.list_orders."""

    @pytest.fixture
    def five_orders(self, operator_user, product_a):
        now = timezone.now()
        return [
            place_order(operator_user, product_a, created_at=now - timedelta(hours=hours))
            for hours in range(5)
        ]

    def test_newest_first(self, operator_user, five_orders):
        result = OrderService().list_orders(operator_user.pk)

        assert result["total"] == 5
        assert [order.pk for order in result["orders"]] == [order.pk for order in five_orders]

    def test_pagination(self, operator_user, five_orders):
        service = OrderService()

        first = service.list_orders(operator_user.pk, page=1, items_per_page=2)
        last = service.list_orders(operator_user.pk, page=3, items_per_page=2)

        assert len(first["orders"]) == 2
        assert len(last["orders"]) == 1
        assert last["orders"][0].pk == five_orders[4].pk
        assert last["total"] == 5
        assert last["page"] == 3
        assert last["items_per_page"] == 2

    def test_same_timestamp_pages_are_stable(self, operator_user, product_a):
        """Orders sharing created_at are ordered by id, so pages never overlap."""
        orders = [place_order(operator_user, product_a) for _ in range(4)]
        Order.objects.update(created_at=timezone.now() - timedelta(hours=1))
        service = OrderService()

        seen = []
        for page in range(1, 5):
            result = service.list_orders(operator_user.pk, page=page, items_per_page=1)
            seen.extend(order.pk for order in result["orders"])

        assert seen == sorted((order.pk for order in orders), reverse=True)

    def test_page_past_the_end_is_empty(self, operator_user, five_orders):
        result = OrderService().list_orders(operator_user.pk, page=10, items_per_page=2)

        assert result["orders"] == []
        assert result["total"] == 5

    def test_default_page_size(self, settings, operator_user, five_orders):
        settings.ORDERS_DEFAULT_PAGE_SIZE = 3

        result = OrderService().list_orders(operator_user.pk)

        assert len(result["orders"]) == 3
        assert result["page"] == 1
        assert result["items_per_page"] == 3

    @pytest.mark.parametrize("page,items_per_page", [(0, 10), (1, 0), ("x", 10), (1, 1000)])
    def test_bad_page_params(self, operator_user, page, items_per_page):
        with pytest.raises(InvalidParams):
            OrderService().list_orders(operator_user.pk, page=page, items_per_page=items_per_page)

    def test_filter_by_customer(self, operator_user, product_a, customer):
        mine = place_order(operator_user, product_a, customer_id=customer.pk)
        place_order(operator_user, product_a)

        result = OrderService().list_orders(operator_user.pk, customer_id=customer.pk)

        assert result["total"] == 1
        assert result["orders"][0].pk == mine.pk

    def test_unknown_customer_filter(self, operator_user):
        with pytest.raises(NotFound):
            OrderService().list_orders(operator_user.pk, customer_id=uuid.uuid4())

    def test_filter_by_draft(self, operator_user, product_a):
        place_order(operator_user, product_a)
        budget = place_order(operator_user, product_a, draft=True)

        drafts = OrderService().list_orders(operator_user.pk, draft=True)
        sales = OrderService().list_orders(operator_user.pk, draft=False)

        assert [order.pk for order in drafts["orders"]] == [budget.pk]
        assert sales["total"] == 1

    def test_date_range_is_inclusive(self, operator_user, product_a):
        now = timezone.now()
        start = now - timedelta(days=10)
        end = now - timedelta(days=5)

        on_start = place_order(operator_user, product_a, created_at=start)
        on_end = place_order(operator_user, product_a, created_at=end)
        place_order(operator_user, product_a, created_at=start - timedelta(seconds=1))
        place_order(operator_user, product_a, created_at=end + timedelta(seconds=1))

        result = OrderService().list_orders(operator_user.pk, start_date=start, end_date=end)

        assert {order.pk for order in result["orders"]} == {on_start.pk, on_end.pk}

    def test_search_by_customer_name(self, operator_user, product_a, customer):
        other = Customer.objects.create(name="João Pereira")
        place_order(operator_user, product_a, customer_id=customer.pk)
        place_order(operator_user, product_a, customer_id=other.pk)

        result = OrderService().list_orders(operator_user.pk, search="Silva")

        assert result["total"] == 1
        assert result["orders"][0].customer == customer

    def test_unknown_caller(self):
        with pytest.raises(WithoutPermission):
            OrderService().list_orders(None)


@pytest.mark.django_db
class TestGetOrder:
    """Test OrderService.get_order and the detail representation."""

    def test_detail_has_snapshot_and_current_prices(self, operator_user, product_a, customer):
        order = OrderService().create_order(
            operator_user.pk,
            [{"product_id": product_a.pk, "quantity": 2, "custom_price": 90, "obs": "engraved"}],
            customer_id=customer.pk,
        )

        product_a.refresh_from_db()
        product_a.price = 120
        product_a.cost_price = 70
        product_a.save()

        detail = OrderDetailSerializer(OrderService().get_order(operator_user.pk, order.pk)).data

        assert detail["customer"]["name"] == "Maria Silva"
        assert detail["total_price"] == 180
        line = detail["line_items"][0]
        assert line["product_id"] == str(product_a.pk)
        assert line["name"] == "Silver Ring"
        assert line["barcode"] == "7890000000011"
        assert line["quantity"] == 2
        assert line["price"] == 100
        assert line["cost_price"] == 60
        assert line["custom_price"] == 90
        assert line["current_price"] == 120
        assert line["current_cost_price"] == 70
        assert line["subtotal"] == 180
        assert line["obs"] == "engraved"

    def test_detail_after_product_deleted(self, operator_user, product_a):
        order = place_order(operator_user, product_a, quantity=2)
        product_a.delete()

        detail = OrderDetailSerializer(OrderService().get_order(operator_user.pk, order.pk)).data

        line = detail["line_items"][0]
        assert line["product_id"] is None
        assert line["name"] is None
        assert line["current_price"] is None
        assert line["price"] == 100
        assert detail["customer"] is None

    def test_missing_order(self, operator_user):
        with pytest.raises(NotFound):
            OrderService().get_order(operator_user.pk, uuid.uuid4())

    def test_malformed_order_id(self, operator_user):
        with pytest.raises(NotFound):
            OrderService().get_order(operator_user.pk, "order-1")
