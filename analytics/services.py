import logging
from decimal import Decimal

from django.db.models import Count

from audit.models import AuditLog
from inventory.models import Category, InventoryItem
from . import stores
from .forecasting import forecast
from .trends import aggregate_trends

logger = logging.getLogger(__name__)


def forecast_item(item_id, today=None):
    """
    Load an item with its snapshot window and run the forecast engine.

    Raises InventoryItem.DoesNotExist for unknown items.
    """
    config = stores.forecast_config()
    item = stores.load_item(item_id)
    snapshots = stores.load_item_snapshots(item.pk, today)

    result = forecast(
        item,
        snapshots,
        moving_average_window=config['MOVING_AVERAGE_WINDOW'],
        projection_days=config['PROJECTION_DAYS'],
        reorder_horizon_days=config['REORDER_HORIZON_DAYS'],
    )

    logger.info(
        f"Forecast for {item.sku}: {len(snapshots)} snapshots, "
        f"rate {result.avg_daily_consumption}/day, "
        f"stockout in {result.stockout_days_or_sentinel} days, "
        f"reorder {'YES' if result.reorder_suggested else 'no'}"
    )
    return result


def stock_trends(today=None):
    return aggregate_trends(stores.load_all_snapshots(today), stores.load_item_lookup())


def build_overview(recent_limit=5):
    """Headline numbers for the dashboard."""
    items = InventoryItem.objects.all()

    # Inventory value - calculate safely
    total_value = Decimal('0.00')
    for item in items.only('quantity', 'sell_price'):
        total_value += item.stock_value

    status_breakdown = [
        {'status': row['status'], 'count': row['count']}
        for row in items.order_by().values('status').annotate(count=Count('id')).order_by('status')
    ]

    recent_activity = (
        AuditLog.objects
        .select_related('user', 'user__profile')
        .all()[:recent_limit]
    )

    return {
        'total_items': items.count(),
        'low_stock_items': items.filter(status='low_stock').count(),
        'total_categories': Category.objects.count(),
        'total_value': float(total_value),
        'recent_activity': list(recent_activity),
        'status_breakdown': status_breakdown,
    }
