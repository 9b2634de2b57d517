from django.contrib import admin
from django.utils.html import format_html
from django.urls import reverse
from django.http import HttpResponse
import csv

from .models import Category, InventoryItem, StockSnapshot

# ============================================
# CUSTOM ACTIONS
# ============================================

def export_to_csv(modeladmin, request, queryset):
    """Export selected items to CSV"""
    opts = modeladmin.model._meta
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename={opts.verbose_name_plural}.csv'

    writer = csv.writer(response)
    fields = [field for field in opts.get_fields() if not field.many_to_many and not field.one_to_many]

    # Write headers
    writer.writerow([field.verbose_name for field in fields])

    # Write data
    for obj in queryset:
        writer.writerow([getattr(obj, field.name) for field in fields])

    return response
export_to_csv.short_description = "Export to CSV"


def _set_status(queryset, status, user):
    # Save one by one so the audit signals record each status change
    for item in queryset:
        item.status = status
        item.updated_by = user
        item.save()


def _delete_as(user, objects):
    # Row by row so the delete signals log the admin who deleted each one
    for obj in objects:
        obj.updated_by = user
        obj.delete()


def mark_as_ordered(modeladmin, request, queryset):
    _set_status(queryset, 'ordered', request.user)
mark_as_ordered.short_description = "Mark as ordered"


def mark_as_discontinued(modeladmin, request, queryset):
    _set_status(queryset, 'discontinued', request.user)
mark_as_discontinued.short_description = "Mark as discontinued"


# ============================================
# INLINE ADMINS
# ============================================

class StockSnapshotInline(admin.TabularInline):
    model = StockSnapshot
    extra = 0
    can_delete = False
    readonly_fields = ['snapshot_date', 'quantity', 'created_at']
    fields = ['snapshot_date', 'quantity', 'created_at']
    ordering = ['-snapshot_date']

    def has_add_permission(self, request, obj=None):
        return False


class InventoryItemInline(admin.TabularInline):
    model = InventoryItem
    extra = 0
    fields = ['sku', 'name', 'quantity', 'min_quantity', 'status']
    readonly_fields = ['status']
    show_change_link = True


# ============================================
# CATEGORY ADMIN
# ============================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'color_badge',
        'item_count',
        'total_stock_value',
        'created_at',
    ]
    search_fields = ['name', 'description']
    readonly_fields = ['created_by', 'updated_by', 'created_at']
    inlines = [InventoryItemInline]
    actions = [export_to_csv]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        _delete_as(request.user, [obj])

    def delete_queryset(self, request, queryset):
        _delete_as(request.user, queryset)

    def color_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            obj.color,
            obj.color
        )
    color_badge.short_description = 'Colour'

    def item_count(self, obj):
        count = obj.items.count()
        url = reverse('admin:inventory_inventoryitem_changelist') + f'?category__id__exact={obj.id}'
        return format_html('<a href="{}">{} items</a>', url, count)
    item_count.short_description = 'Items'

    def total_stock_value(self, obj):
        total = sum(item.stock_value for item in obj.items.all())
        formatted_value = '${:,.2f}'.format(float(total))
        return format_html('<strong>{}</strong>', formatted_value)
    total_stock_value.short_description = 'Stock Value'


# ============================================
# INVENTORY ITEM ADMIN
# ============================================

@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = [
        'sku',
        'name',
        'category_link',
        'quantity_display',
        'min_quantity',
        'status_badge',
        'pricing_info',
        'forecast_link',
        'updated_at',
    ]
    list_filter = [
        'status',
        'category',
        'created_at',
    ]
    search_fields = [
        'sku',
        'name',
        'location',
    ]
    readonly_fields = [
        'created_by',
        'updated_by',
        'created_at',
        'updated_at',
    ]

    fieldsets = (
        ('Basic Information', {
            'fields': (
                'name',
                'sku',
                'category',
                'description',
                'image_url',
            )
        }),
        ('Inventory', {
            'fields': (
                'quantity',
                'min_quantity',
                'unit',
                'status',
                'location',
            )
        }),
        ('Pricing', {
            'fields': (
                'cost_price',
                'sell_price',
            )
        }),
        ('Timestamps', {
            'fields': (
                'created_by',
                'updated_by',
                'created_at',
                'updated_at',
            ),
            'classes': ('collapse',)
        }),
    )

    inlines = [StockSnapshotInline]
    actions = [export_to_csv, mark_as_ordered, mark_as_discontinued]
    date_hierarchy = 'created_at'
    list_per_page = 50

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('category')

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        _delete_as(request.user, [obj])

    def delete_queryset(self, request, queryset):
        _delete_as(request.user, queryset)

    def category_link(self, obj):
        if obj.category:
            url = reverse('admin:inventory_category_change', args=[obj.category.id])
            return format_html('<a href="{}">{}</a>', url, obj.category.name)
        return '-'
    category_link.short_description = 'Category'
    category_link.admin_order_field = 'category__name'

    def quantity_display(self, obj):
        qty = obj.quantity or 0
        if qty == 0:
            color = '#dc3545'
        elif obj.is_low_stock:
            color = '#ffc107'
        else:
            color = '#28a745'
        return format_html('<span style="color: {}; font-weight: bold;">{} {}</span>', color, qty, obj.unit)
    quantity_display.short_description = 'Quantity'
    quantity_display.admin_order_field = 'quantity'

    def status_badge(self, obj):
        colors = {
            'in_stock': '#28a745',
            'low_stock': '#ffc107',
            'ordered': '#007bff',
            'discontinued': '#6c757d',
        }
        color = colors.get(obj.status, '#6c757d')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            color,
            (obj.get_status_display() or '').upper()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def pricing_info(self, obj):
        formatted_cost = '${:,.2f}'.format(float(obj.cost_price or 0))
        formatted_sell = '${:,.2f}'.format(float(obj.sell_price or 0))
        return format_html(
            'Cost: <strong>{}</strong><br>Sell: <strong>{}</strong>',
            formatted_cost,
            formatted_sell
        )
    pricing_info.short_description = 'Pricing'

    def forecast_link(self, obj):
        url = reverse('analytics:item-forecast', args=[obj.id])
        return format_html('<a href="{}">Forecast</a>', url)
    forecast_link.short_description = 'Forecast'


# ============================================
# STOCK SNAPSHOT ADMIN
# ============================================

@admin.register(StockSnapshot)
class StockSnapshotAdmin(admin.ModelAdmin):
    """Read-only: snapshots are written by record_stock_snapshots"""

    list_display = ['snapshot_date', 'item', 'quantity', 'created_at']
    list_filter = ['snapshot_date']
    search_fields = ['item__sku', 'item__name']
    date_hierarchy = 'snapshot_date'
    actions = [export_to_csv]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
