"""
Pytest configuration and fixtures for the Kasir point-of-sale application.
"""

from decimal import Decimal

import pytest


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client.
    """
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def make_product(db):
    """
    Factory fixture for catalog products.

    Usage: make_product("Kopi", price="10.00", stock=5)
    """
    from apps.inventory.models import Product

    def _make_product(name="Test Product", price="10.00", stock=10, category="Minuman"):
        return Product.objects.create(
            name=name,
            unit_price=Decimal(price),
            stock=stock,
            category=category,
        )

    return _make_product


@pytest.fixture
def product_a(make_product):
    """Product A from the reference scenario: stock 5, price 10."""
    return make_product("Product A", price="10.00", stock=5)


@pytest.fixture
def product_b(make_product):
    """Product B from the reference scenario: sold out, price 20."""
    return make_product("Product B", price="20.00", stock=0)
