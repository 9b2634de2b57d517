"""
Cross-item trend aggregation.

Reduces the snapshot stream of every item into one point per day:
total units on hand, their value at current sell prices and how many
items sat at or below their minimum quantity.
"""
from dataclasses import dataclass
from typing import Optional

from .forecasting import round_half_up


@dataclass(frozen=True)
class ItemSnapshot:
    item_id: object
    date: str
    quantity: int


@dataclass(frozen=True)
class ItemInfo:
    sell_price: Optional[float]
    min_quantity: int


@dataclass
class TrendPoint:
    date: str
    total_quantity: int = 0
    total_value: float = 0
    low_stock_count: int = 0


def aggregate_trends(snapshots, item_lookup):
    """
    Group snapshots by date.

    Args:
        snapshots: objects exposing item_id, date (ISO string) and quantity
        item_lookup: mapping of item id -> ItemInfo. Snapshots of items
            missing from the lookup still count towards total_quantity but
            add no value and are never counted as low stock.

    Returns:
        list of TrendPoint ordered by plain string comparison of the date,
        which matches calendar order for zero-padded ISO dates.
    """
    points = {}

    for snapshot in snapshots:
        point = points.get(snapshot.date)
        if point is None:
            point = points[snapshot.date] = TrendPoint(date=snapshot.date)

        info = item_lookup.get(snapshot.item_id)
        point.total_quantity += snapshot.quantity
        point.total_value += snapshot.quantity * ((info.sell_price if info else None) or 0)

        if info and snapshot.quantity <= info.min_quantity:
            point.low_stock_count += 1

    trends = []
    for key in sorted(points):
        point = points[key]
        point.total_value = round_half_up(point.total_value, 2)
        trends.append(point)
    return trends
