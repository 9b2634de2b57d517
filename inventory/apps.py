from django.apps import AppConfig


class InventoryConfig(AppConfig):
    """
    Configuration for the Inventory application.
    
    This app owns the stores the analytics layer reads from:
    - Categories (grouping and badge colour)
    - Inventory Items (quantity, minimum quantity, prices, status)
    - Stock Snapshots (one quantity reading per item per day)
    
    Features:
    - Automatic in_stock/low_stock status from quantity
    - Audit trail for item and category changes
    - Daily snapshot recording command
    """
    
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'inventory'
    verbose_name = 'Inventory Management'
    
    def ready(self):
        """
        Import signal handlers when the app is ready.
        
        Signals handle:
        - Audit log entries for item and category changes
        - Low stock warnings
        - Snapshot deletion alerts
        """
        import inventory.signals  # noqa: F401
