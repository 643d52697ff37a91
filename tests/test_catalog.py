"""
Tests for the catalog accessor used by order fulfillment.
"""

import uuid

from django.db import transaction

import pytest

from apps.inventory.catalog import get_products_by_ids, products_queryset


@pytest.mark.django_db
class TestProductsQueryset:
    """Test the batch product read and its row locks."""

    def test_plain_read_takes_no_lock(self, product_a):
        queryset = products_queryset([product_a.pk])

        assert not queryset.query.select_for_update

    def test_locked_read_is_in_primary_key_order(self, product_a, product_b):
        with transaction.atomic():
            queryset = products_queryset([product_b.pk, product_a.pk], lock=True)

            assert queryset.query.select_for_update
            assert queryset.query.order_by == ("pk",)
            assert [product.pk for product in queryset] == sorted([product_a.pk, product_b.pk])

    def test_missing_ids_are_absent(self, product_a):
        missing = uuid.uuid4()

        products = get_products_by_ids([product_a.pk, missing], lock=True)

        assert set(products) == {product_a.pk}
        assert products[product_a.pk].name == "Silver Ring"
