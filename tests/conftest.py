from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from inventory.models import Category, InventoryItem, StockSnapshot


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='alice', password='s3cret-pass', first_name='Alice', last_name='Mwangi'
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def category(user):
    return Category.objects.create(name='Tools', created_by=user)


@pytest.fixture
def make_item(user, category):
    counter = {'n': 0}

    def _make(**kwargs):
        counter['n'] += 1
        defaults = {
            'name': f"Item {counter['n']}",
            'sku': f"SKU-{counter['n']:04d}",
            'quantity': 50,
            'min_quantity': 10,
            'sell_price': Decimal('2.00'),
            'category': category,
            'created_by': user,
        }
        defaults.update(kwargs)
        return InventoryItem.objects.create(**defaults)

    return _make


@pytest.fixture
def record_history():
    """Write one snapshot per quantity on consecutive days ending at `last_day`."""

    def _record(item, quantities, last_day):
        first_day = last_day - timedelta(days=len(quantities) - 1)
        return [
            StockSnapshot.objects.create(
                item=item, snapshot_date=first_day + timedelta(days=offset), quantity=quantity
            )
            for offset, quantity in enumerate(quantities)
        ]

    return _record
