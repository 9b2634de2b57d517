from types import SimpleNamespace

import pytest

from analytics.forecasting import (
    INDETERMINATE,
    SnapshotOrderError,
    SnapshotPoint,
    consumption_rate,
    daily_deltas,
    forecast,
    moving_average,
    regression_slope,
    round_half_up,
)


def make_item(quantity, min_quantity=10):
    return SimpleNamespace(id=1, name='Cordless Drill', quantity=quantity, min_quantity=min_quantity)


def make_history(quantities, first_day=1):
    return [
        SnapshotPoint(date=f'2024-01-{first_day + offset:02d}', quantity=quantity)
        for offset, quantity in enumerate(quantities)
    ]


# ============================================
# HELPERS
# ============================================

def test_round_half_up_rounds_halves_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(10.666666, 2) == 10.67
    assert round_half_up(0.125, 2) == 0.13


def test_daily_deltas_treat_restock_as_negative():
    assert daily_deltas([100, 90, 95]) == [10, -5]


def test_moving_average_uses_only_most_recent_window():
    assert moving_average([50, 1, 1, 1, 1, 1, 1, 1], window=7) == 1.0
    assert moving_average([4, 6], window=7) == 5.0


def test_regression_slope_of_linear_decline():
    assert regression_slope([100, 90, 80, 70]) == -10.0
    assert regression_slope([5, 5, 5]) == 0.0


def test_consumption_rate_ignores_rising_regression():
    # moving average -10, slope +10 counts as 0
    assert consumption_rate([10, 20, 30]) == -5.0


# ============================================
# ENGINE
# ============================================

def test_no_history():
    result = forecast(make_item(40), [])

    assert result.avg_daily_consumption == 0
    assert result.predicted_days_until_stockout is None
    assert result.stockout_days_or_sentinel == INDETERMINATE
    assert result.reorder_suggested is False
    assert result.trend_series == []


def test_single_snapshot_has_no_projection():
    result = forecast(make_item(40), make_history([40]))

    assert result.avg_daily_consumption == 0
    assert result.stockout_days_or_sentinel == -1
    assert result.reorder_suggested is False
    assert len(result.trend_series) == 1
    assert result.trend_series[0].date == '2024-01-01'
    assert result.trend_series[0].predicted is None


def test_steady_decline():
    result = forecast(make_item(70), make_history([100, 90, 80, 70], first_day=28))

    assert result.avg_daily_consumption == 10.0
    assert result.predicted_days_until_stockout == 7
    assert result.reorder_suggested is True
    assert result.item_id == 1
    assert result.item_name == 'Cordless Drill'
    assert result.current_quantity == 70
    assert result.min_quantity == 10


def test_projection_continues_from_last_snapshot_and_stops_at_zero():
    result = forecast(make_item(70), make_history([100, 90, 80, 70], first_day=28))

    history = [entry for entry in result.trend_series if not entry.is_projection]
    projection = [entry for entry in result.trend_series if entry.is_projection]

    assert [entry.quantity for entry in history] == [100, 90, 80, 70]
    assert len(projection) == 14
    assert projection[0].date == '2024-02-01'
    assert projection[-1].date == '2024-02-14'
    assert [entry.predicted for entry in projection] == [60, 50, 40, 30, 20, 10, 0, 0, 0, 0, 0, 0, 0, 0]
    assert all(entry.quantity == entry.predicted for entry in projection)


def test_projection_crosses_month_end():
    result = forecast(make_item(20), make_history([30, 20], first_day=30))

    projection = [entry for entry in result.trend_series if entry.is_projection]
    assert projection[0].date == '2024-02-01'


def test_stockout_uses_current_quantity_not_last_snapshot():
    result = forecast(make_item(100), make_history([100, 90, 80, 70]))

    assert result.predicted_days_until_stockout == 10
    assert result.reorder_suggested is True


def test_reorder_not_suggested_beyond_horizon():
    result = forecast(make_item(300), make_history([100, 90, 80, 70]))

    assert result.predicted_days_until_stockout == 30
    assert result.reorder_suggested is False


def test_two_snapshots_already_below_one_day():
    result = forecast(make_item(4), make_history([10, 4]))

    assert result.avg_daily_consumption == 6.0
    assert result.predicted_days_until_stockout == 0
    assert result.reorder_suggested is True


def test_growing_stock_is_indeterminate():
    result = forecast(make_item(30), make_history([10, 20, 30]))

    assert result.predicted_days_until_stockout is None
    assert result.stockout_days_or_sentinel == -1
    assert result.reorder_suggested is False
    assert result.avg_daily_consumption == -5.0


def test_flat_stock_is_indeterminate():
    result = forecast(make_item(25), make_history([25, 25, 25]))

    assert result.avg_daily_consumption == 0
    assert result.stockout_days_or_sentinel == -1
    assert [entry.predicted for entry in result.trend_series[3:]] == [25] * 14


def test_rate_is_rounded_to_two_places():
    # deltas 3, 4, 4 -> average 3.666..; slope -3.7 -> rate 3.683..
    result = forecast(make_item(89), make_history([100, 97, 93, 89]))

    assert result.avg_daily_consumption == 3.68


def test_custom_horizons():
    result = forecast(
        make_item(70),
        make_history([100, 90, 80, 70]),
        projection_days=3,
        reorder_horizon_days=5,
    )

    assert len([entry for entry in result.trend_series if entry.is_projection]) == 3
    assert result.predicted_days_until_stockout == 7
    assert result.reorder_suggested is False


def test_unordered_snapshots_are_rejected():
    history = [
        SnapshotPoint(date='2024-01-02', quantity=10),
        SnapshotPoint(date='2024-01-01', quantity=12),
    ]
    with pytest.raises(SnapshotOrderError):
        forecast(make_item(10), history)


def test_duplicate_dates_are_rejected():
    history = [
        SnapshotPoint(date='2024-01-01', quantity=10),
        SnapshotPoint(date='2024-01-01', quantity=9),
    ]
    with pytest.raises(SnapshotOrderError):
        forecast(make_item(10), history)
