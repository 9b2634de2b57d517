from django.apps import AppConfig


class AnalyticsConfig(AppConfig):
    """Demand forecast, stock trends and dashboard overview."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'analytics'
    verbose_name = 'Inventory Analytics'
