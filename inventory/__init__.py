"""
Inventory Application

Stock keeping for the stockroom: catalogue, quantities and the daily
snapshot history the analytics app forecasts from.

MODELS:
- Category: Grouping with a badge colour
- InventoryItem: One stocked product with SKU, quantity, minimum quantity and prices
- StockSnapshot: Quantity of one item on one day (append-only)

BUSINESS LOGIC:
  - Saving an item keeps 'in_stock' / 'low_stock' in line with quantity
    vs min_quantity ('ordered' and 'discontinued' are left alone)
  - Every create / update / delete of items and categories lands in the
    audit trail (see inventory.signals)
  - Snapshots are written once a day by:
        python manage.py record_stock_snapshots [--date YYYY-MM-DD]

USAGE:
    from inventory.models import Category, InventoryItem

    tools = Category.objects.create(name="Tools")
    drill = InventoryItem.objects.create(
        name="Cordless Drill",
        sku="TL-0001",
        category=tools,
        quantity=40,
        min_quantity=10,
        sell_price=129,
    )
"""

__version__ = '1.0.0'
