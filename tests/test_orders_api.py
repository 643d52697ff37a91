"""
Tests for the order and report REST endpoints.

Service behaviour is covered elsewhere; these tests check request parsing,
response shape and the mapping of service errors to HTTP statuses.
"""

import uuid

from django.urls import reverse

import pytest
from rest_framework import status

from apps.inventory.models import Product
from apps.sales.models import Order
from apps.sales.services import OrderService


@pytest.fixture
def order(operator_user, product_a):
    return OrderService().create_order(operator_user.pk, [{"product_id": product_a.pk, "quantity": 2}])


@pytest.mark.django_db
class TestAuthentication:
    def test_orders_require_authentication(self, api_client):
        response = api_client.get(reverse("sales:order_list"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_obtain_token_and_list_orders(self, api_client, operator_user):
        response = api_client.post(
            reverse("token_obtain_pair"),
            {"username": "operator", "password": "testpass123"},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = api_client.get(reverse("sales:order_list"))
        assert response.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestOrderCreateAPI:
    """Test POST /api/orders/."""

    def test_create_order(self, authenticated_client, product_a, product_b, customer):
        client, user = authenticated_client

        response = client.post(
            reverse("sales:order_list"),
            {
                "customer_id": str(customer.pk),
                "line_items": [
                    {"product_id": str(product_a.pk), "quantity": 1},
                    {"product_id": str(product_b.pk), "quantity": 2, "custom_price": 40},
                    {"product_id": str(product_a.pk), "quantity": 1},
                ],
                "shipping": {"city": "Recife"},
                "obs": "call first",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["total_price"] == 2 * 100 + 2 * 40
        assert response.data["total_cost_price"] == 2 * 60 + 2 * 20
        assert response.data["status"] == Order.PENDING
        assert response.data["city"] == "Recife"
        assert response.data["customer"]["id"] == str(customer.pk)
        assert len(response.data["line_items"]) == 2

        product_a.refresh_from_db()
        assert product_a.available_quantity == 8

    def test_empty_line_items(self, authenticated_client):
        client, _ = authenticated_client

        response = client.post(reverse("sales:order_list"), {"line_items": []}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "line_items" in response.data

    def test_missing_product(self, authenticated_client):
        client, _ = authenticated_client

        response = client.post(
            reverse("sales:order_list"),
            {"line_items": [{"product_id": str(uuid.uuid4()), "quantity": 1}]},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["code"] == "not_found"

    def test_insufficient_stock(self, settings, authenticated_client, product_a):
        settings.INVENTORY_ALLOW_NEGATIVE_STOCK = False
        client, _ = authenticated_client

        response = client.post(
            reverse("sales:order_list"),
            {"line_items": [{"product_id": str(product_a.pk), "quantity": 11}]},
            format="json",
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["code"] == "insufficient_stock"
        assert Product.objects.get(pk=product_a.pk).available_quantity == 10
        assert Order.objects.count() == 0


@pytest.mark.django_db
class TestOrderListAPI:
    """Test GET /api/orders/."""

    def test_list_with_pagination(self, authenticated_client, product_a):
        client, user = authenticated_client
        for _ in range(3):
            OrderService().create_order(user.pk, [{"product_id": product_a.pk, "quantity": 1}])

        response = client.get(reverse("sales:order_list"), {"page": 2, "items_per_page": 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 3
        assert response.data["page"] == 2
        assert response.data["items_per_page"] == 2
        assert len(response.data["orders"]) == 1

    def test_draft_filter(self, authenticated_client, product_a):
        client, user = authenticated_client
        service = OrderService()
        service.create_order(user.pk, [{"product_id": product_a.pk, "quantity": 1}])
        service.create_order(user.pk, [{"product_id": product_a.pk, "quantity": 1}], draft=True)

        response = client.get(reverse("sales:order_list"), {"draft": "true"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 1
        assert response.data["orders"][0]["draft"] is True

    def test_bad_query_params(self, authenticated_client):
        client, _ = authenticated_client

        assert client.get(reverse("sales:order_list"), {"draft": "maybe"}).status_code == 400
        assert client.get(reverse("sales:order_list"), {"date_from": "yesterday"}).status_code == 400
        assert client.get(reverse("sales:order_list"), {"page": 0}).status_code == 400

    def test_unknown_customer_filter(self, authenticated_client):
        client, _ = authenticated_client

        response = client.get(reverse("sales:order_list"), {"customer": str(uuid.uuid4())})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestOrderDetailAPI:
    """Test the single-order endpoints."""

    def test_get_order(self, authenticated_client, order, product_a):
        client, _ = authenticated_client

        response = client.get(reverse("sales:order_detail", args=[order.pk]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == str(order.pk)
        line = response.data["line_items"][0]
        assert line["product_id"] == str(product_a.pk)
        assert line["current_price"] == 100

    def test_get_missing_order(self, authenticated_client):
        client, _ = authenticated_client

        response = client.get(reverse("sales:order_detail", args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"detail": response.data["detail"], "code": "not_found"}

    def test_delete_order(self, authenticated_client, order, product_a):
        client, _ = authenticated_client

        response = client.delete(reverse("sales:order_detail", args=[order.pk]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Order.objects.filter(pk=order.pk).exists()
        product_a.refresh_from_db()
        assert product_a.available_quantity == 10

    def test_update_status(self, authenticated_client, order):
        client, _ = authenticated_client

        response = client.patch(
            reverse("sales:order_update_status", args=[order.pk]),
            {"status": Order.IN_PROGRESS},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"id": str(order.pk), "status": Order.IN_PROGRESS}
        order.refresh_from_db()
        assert order.status == Order.IN_PROGRESS

    def test_update_status_rejects_unknown_value(self, authenticated_client, order):
        client, _ = authenticated_client

        response = client.patch(
            reverse("sales:order_update_status", args=[order.pk]),
            {"status": "lost"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_shipping(self, authenticated_client, order):
        client, _ = authenticated_client

        response = client.patch(
            reverse("sales:order_update_shipping", args=[order.pk]),
            {"zipcode": "50000-000", "neighborhood": "Boa Viagem"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["zipcode"] == "50000-000"
        assert response.data["neighborhood"] == "Boa Viagem"
        order.refresh_from_db()
        assert order.neighborhood == "Boa Viagem"


@pytest.mark.django_db
class TestOrdersReportAPI:
    """Test GET /api/reports/orders/."""

    def test_report(self, authenticated_client, order):
        client, _ = authenticated_client

        response = client.get(reverse("reporting:orders_report"), {"period": "last_7_days"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["orders_count"] == 1
        assert response.data["revenue"] == 200
        assert response.data["profit"] == 80
        assert len(response.data["orders"]) == 1

    def test_unknown_period(self, authenticated_client):
        client, _ = authenticated_client

        response = client.get(reverse("reporting:orders_report"), {"period": "forever"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == "invalid_params"
