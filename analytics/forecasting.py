"""
Demand forecasting engine.

Given the daily stock snapshots of one item (oldest first) the engine
estimates a consumption rate, the number of days until the item runs out
and a 14 day projection used by the analytics charts.

The consumption rate is the mean of two estimators:

    * the moving average of the most recent day-over-day decreases
      (up to MOVING_AVERAGE_WINDOW of them)
    * the magnitude of the least-squares slope of quantity over the
      snapshot index, counted only when stock is declining

Everything here is plain Python. Callers fetch the snapshots and the item
(see analytics.stores) and pass them in already materialised.
"""
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional


MOVING_AVERAGE_WINDOW = 7
PROJECTION_DAYS = 14
REORDER_HORIZON_DAYS = 14

# External representation of an undeterminable stockout horizon
INDETERMINATE = -1


class SnapshotOrderError(ValueError):
    """Raised when snapshot dates are not strictly ascending."""


@dataclass(frozen=True)
class SnapshotPoint:
    date: str
    quantity: int


@dataclass
class TrendEntry:
    date: str
    quantity: int
    predicted: Optional[int] = None

    @property
    def is_projection(self):
        return self.predicted is not None


@dataclass
class ForecastResult:
    item_id: object
    item_name: str
    current_quantity: int
    min_quantity: int
    avg_daily_consumption: float
    predicted_days_until_stockout: Optional[int]
    reorder_suggested: bool
    trend_series: List[TrendEntry] = field(default_factory=list)

    @property
    def stockout_days_or_sentinel(self):
        if self.predicted_days_until_stockout is None:
            return INDETERMINATE
        return self.predicted_days_until_stockout


# ============================================
# HELPERS
# ============================================

def round_half_up(value, places=0):
    """
    Round like JavaScript's Math.round: halves go towards +infinity.

    Python's round() uses banker's rounding, which would turn 2.5 into 2.
    """
    factor = 10 ** places
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if places == 0 else rounded


def as_date(value):
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def check_ascending(snapshots):
    """Fail fast unless snapshot dates are strictly increasing."""
    previous = None
    for snapshot in snapshots:
        current = as_date(snapshot.date)
        if previous is not None and current <= previous:
            raise SnapshotOrderError(
                f"Snapshots must be strictly ascending by date: "
                f"{current.isoformat()} follows {previous.isoformat()}"
            )
        previous = current


def daily_deltas(quantities):
    """Stock consumed between each pair of adjacent days (negative = restock)."""
    return [quantities[i - 1] - quantities[i] for i in range(1, len(quantities))]


def moving_average(deltas, window=MOVING_AVERAGE_WINDOW):
    recent = deltas[-min(window, len(deltas)):]
    return sum(recent) / len(recent)


def regression_slope(quantities):
    """
    Ordinary least squares slope of quantity against index 0..n-1.

    With consecutive integer indices the denominator equals
    n^2 (n^2 - 1) / 12, which is positive for every n >= 2.
    """
    n = len(quantities)
    sum_x = sum_y = sum_xy = sum_xx = 0
    for x, y in enumerate(quantities):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_xx += x * x
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def consumption_rate(quantities, window=MOVING_AVERAGE_WINDOW):
    """Blend of the moving average and the declining regression slope."""
    avg = moving_average(daily_deltas(quantities), window)
    slope = regression_slope(quantities)
    regression_consumption = -slope if slope < 0 else 0
    return (avg + regression_consumption) / 2


def project(last_date, last_quantity, rate, days=PROJECTION_DAYS):
    entries = []
    projected = last_quantity
    for offset in range(1, days + 1):
        projected = max(0, projected - rate)
        value = round_half_up(projected)
        entries.append(TrendEntry(
            date=(last_date + timedelta(days=offset)).isoformat(),
            quantity=value,
            predicted=value,
        ))
    return entries


# ============================================
# ENGINE
# ============================================

def forecast(item, snapshots, moving_average_window=MOVING_AVERAGE_WINDOW,
             projection_days=PROJECTION_DAYS,
             reorder_horizon_days=REORDER_HORIZON_DAYS):
    """
    Forecast demand for one item.

    Args:
        item: object exposing id, name, quantity and min_quantity
        snapshots: sequence of objects exposing date and quantity,
            strictly ascending by date

    Returns:
        ForecastResult. Histories shorter than two snapshots give a zero
        rate, an indeterminate horizon and no projection.
    """
    snapshots = list(snapshots)
    check_ascending(snapshots)

    trend_series = [
        TrendEntry(date=as_date(s.date).isoformat(), quantity=s.quantity)
        for s in snapshots
    ]

    rate = 0
    days_until_stockout = None

    if len(snapshots) >= 2:
        quantities = [s.quantity for s in snapshots]
        rate = consumption_rate(quantities, moving_average_window)

        if rate > 0:
            days_until_stockout = math.floor(item.quantity / rate)

        last = snapshots[-1]
        trend_series.extend(
            project(as_date(last.date), last.quantity, rate, projection_days)
        )

    return ForecastResult(
        item_id=item.id,
        item_name=item.name,
        current_quantity=item.quantity,
        min_quantity=item.min_quantity,
        avg_daily_consumption=round_half_up(rate, 2),
        predicted_days_until_stockout=days_until_stockout,
        reorder_suggested=(
            days_until_stockout is not None
            and days_until_stockout <= reorder_horizon_days
        ),
        trend_series=trend_series,
    )
