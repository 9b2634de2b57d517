from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    color = models.CharField(max_length=7, default='#6366f1', help_text="Hex colour used for badges")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='categories_created',
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='categories_updated',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name


class InventoryItem(models.Model):
    STATUS_CHOICES = [
        ('in_stock', 'In Stock'),
        ('low_stock', 'Low Stock'),
        ('ordered', 'Ordered'),
        ('discontinued', 'Discontinued'),
    ]

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    sku = models.CharField(max_length=100, unique=True)
    quantity = models.PositiveIntegerField(default=0)
    min_quantity = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=20, default='pcs')
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items',
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='in_stock')
    cost_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)],
    )
    sell_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)],
    )
    location = models.CharField(max_length=255, blank=True, null=True)
    image_url = models.URLField(blank=True, null=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items_created',
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items_updated',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='inventoryitem_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    @property
    def is_low_stock(self):
        return self.quantity <= self.min_quantity

    @property
    def stock_value(self):
        return Decimal(self.quantity) * (self.sell_price or Decimal('0.00'))

    def _update_status(self):
        """
        Keep in_stock/low_stock in line with the quantity.

        ordered and discontinued are set by hand and left alone.
        """
        if self.status == 'in_stock' and self.is_low_stock:
            self.status = 'low_stock'
        elif self.status == 'low_stock' and not self.is_low_stock:
            self.status = 'in_stock'

    def save(self, *args, **kwargs):
        self._update_status()
        super().save(*args, **kwargs)


class StockSnapshot(models.Model):
    """
    Quantity on hand of one item on one calendar day.

    Rows are append-only: written once by the record_stock_snapshots
    command and read by the analytics layer.
    """
    item = models.ForeignKey(InventoryItem, on_delete=models.CASCADE, related_name='snapshots')
    snapshot_date = models.DateField()
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['snapshot_date']
        constraints = [
            models.UniqueConstraint(fields=['item', 'snapshot_date'], name='unique_item_snapshot_date'),
        ]

    def __str__(self):
        return f"{self.item.sku} @ {self.snapshot_date}: {self.quantity}"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValidationError("Stock snapshots are immutable once recorded")
        super().save(*args, **kwargs)
