from analytics.trends import ItemInfo, ItemSnapshot, aggregate_trends


def test_totals_per_day():
    snapshots = [
        ItemSnapshot(item_id=1, date='2024-01-01', quantity=5),
        ItemSnapshot(item_id=2, date='2024-01-01', quantity=3),
    ]
    lookup = {
        1: ItemInfo(sell_price=2.0, min_quantity=10),
        2: ItemInfo(sell_price=10.0, min_quantity=1),
    }

    [point] = aggregate_trends(snapshots, lookup)

    assert point.date == '2024-01-01'
    assert point.total_quantity == 8
    assert point.total_value == 40.0
    assert point.low_stock_count == 1


def test_quantity_equal_to_minimum_is_low_stock():
    snapshots = [ItemSnapshot(item_id=1, date='2024-01-01', quantity=10)]

    [point] = aggregate_trends(snapshots, {1: ItemInfo(sell_price=1.0, min_quantity=10)})

    assert point.low_stock_count == 1


def test_unknown_item_counts_quantity_only():
    snapshots = [
        ItemSnapshot(item_id=1, date='2024-01-01', quantity=4),
        ItemSnapshot(item_id=99, date='2024-01-01', quantity=0),
        ItemSnapshot(item_id=99, date='2024-01-02', quantity=7),
    ]

    points = aggregate_trends(snapshots, {1: ItemInfo(sell_price=2.5, min_quantity=0)})

    assert [(p.total_quantity, p.total_value, p.low_stock_count) for p in points] == [
        (4, 10.0, 0),
        (7, 0, 0),
    ]


def test_missing_price_adds_no_value():
    snapshots = [ItemSnapshot(item_id=1, date='2024-01-01', quantity=6)]

    [point] = aggregate_trends(snapshots, {1: ItemInfo(sell_price=None, min_quantity=2)})

    assert point.total_quantity == 6
    assert point.total_value == 0


def test_points_are_sorted_by_date_string():
    snapshots = [
        ItemSnapshot(item_id=1, date='2024-01-10', quantity=1),
        ItemSnapshot(item_id=1, date='2023-12-31', quantity=2),
        ItemSnapshot(item_id=1, date='2024-01-02', quantity=3),
    ]

    points = aggregate_trends(snapshots, {})

    assert [p.date for p in points] == ['2023-12-31', '2024-01-02', '2024-01-10']


def test_value_is_rounded_to_cents():
    snapshots = [
        ItemSnapshot(item_id=1, date='2024-01-01', quantity=1),
        ItemSnapshot(item_id=2, date='2024-01-01', quantity=1),
    ]
    lookup = {
        1: ItemInfo(sell_price=0.1, min_quantity=0),
        2: ItemInfo(sell_price=0.2, min_quantity=0),
    }

    [point] = aggregate_trends(snapshots, lookup)

    assert point.total_value == 0.3


def test_empty_input():
    assert aggregate_trends([], {}) == []
