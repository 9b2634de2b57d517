"""
Read-only adapters between the inventory tables and the analytics engine.

The engine only sees plain dataclasses; every ORM query lives here.
"""
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from inventory.models import InventoryItem, StockSnapshot
from .forecasting import SnapshotPoint
from .trends import ItemInfo, ItemSnapshot


def forecast_config():
    config = {
        'LOOKBACK_DAYS': 30,
        'MOVING_AVERAGE_WINDOW': 7,
        'PROJECTION_DAYS': 14,
        'REORDER_HORIZON_DAYS': 14,
    }
    config.update(getattr(settings, 'FORECAST_CONFIG', {}))
    return config


def window_start(today=None):
    """First calendar day inside the lookback window."""
    today = today or timezone.localdate()
    return today - timedelta(days=forecast_config()['LOOKBACK_DAYS'])


def load_item(item_id):
    """Raises InventoryItem.DoesNotExist for unknown ids."""
    return InventoryItem.objects.get(pk=item_id)


def load_item_snapshots(item_id, today=None):
    rows = (
        StockSnapshot.objects
        .filter(item_id=item_id, snapshot_date__gte=window_start(today))
        .order_by('snapshot_date')
        .values_list('snapshot_date', 'quantity')
    )
    return [SnapshotPoint(date=day.isoformat(), quantity=quantity) for day, quantity in rows]


def load_all_snapshots(today=None):
    rows = (
        StockSnapshot.objects
        .filter(snapshot_date__gte=window_start(today))
        .order_by('snapshot_date')
        .values_list('item_id', 'snapshot_date', 'quantity')
    )
    return [
        ItemSnapshot(item_id=item_id, date=day.isoformat(), quantity=quantity)
        for item_id, day, quantity in rows
    ]


def load_item_lookup():
    """Current sell price and minimum quantity of every item, by id."""
    lookup = {}
    for item_id, sell_price, min_quantity in InventoryItem.objects.values_list(
        'id', 'sell_price', 'min_quantity'
    ):
        lookup[item_id] = ItemInfo(
            sell_price=float(sell_price) if sell_price is not None else None,
            min_quantity=min_quantity,
        )
    return lookup
