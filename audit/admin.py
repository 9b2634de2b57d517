from django.contrib import admin
from django.utils.html import format_html

from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'action_badge', 'entity_type', 'entity_id', 'user']
    list_filter = ['action', 'entity_type', 'created_at']
    search_fields = ['entity_id', 'user__username']
    date_hierarchy = 'created_at'
    readonly_fields = ['user', 'action', 'entity_type', 'entity_id', 'old_values', 'new_values', 'created_at']

    def action_badge(self, obj):
        colors = {
            'create': '#28a745',
            'update': '#007bff',
            'delete': '#dc3545',
            'status_change': '#ffc107',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            colors.get(obj.action, '#6c757d'),
            obj.get_action_display()
        )
    action_badge.short_description = 'Action'
    action_badge.admin_order_field = 'action'

    # The trail is append-only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
