"""
Pytest configuration and fixtures for the retail back office.
"""

import pytest

from apps.core.models import User
from apps.inventory.models import Product
from apps.sales.models import Customer


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client.
    """
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def operator_user(django_user_model):
    """Active user with the lowest role."""
    return django_user_model.objects.create_user(
        username="operator",
        email="operator@example.com",
        password="testpass123",
        role=User.OPERATOR,
    )


@pytest.fixture
def manager_user(django_user_model):
    return django_user_model.objects.create_user(
        username="manager",
        email="manager@example.com",
        password="testpass123",
        role=User.ADMIN,
    )


@pytest.fixture
def inactive_user(django_user_model):
    return django_user_model.objects.create_user(
        username="former",
        email="former@example.com",
        password="testpass123",
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, operator_user):
    """
    Fixture for authenticated API client.
    """
    api_client.force_authenticate(user=operator_user)
    return api_client, operator_user


@pytest.fixture
def customer(db):
    return Customer.objects.create(
        name="Maria Silva",
        email="maria@example.com",
        phone="+5511999990000",
        city="São Paulo",
    )


@pytest.fixture
def product_a(db):
    """Catalog product priced 100 with cost 60 and 10 units in stock."""
    return Product.objects.create(
        name="Silver Ring",
        barcode="7890000000011",
        price=100,
        cost_price=60,
        available_quantity=10,
    )


@pytest.fixture
def product_b(db):
    """Catalog product priced 50 with cost 20 and 5 units in stock."""
    return Product.objects.create(
        name="Leather Bracelet",
        barcode="7890000000028",
        price=50,
        cost_price=20,
        available_quantity=5,
    )
