from django.db.models.signals import post_save, pre_save, post_delete
from django.conf import settings
from django.dispatch import receiver

from audit.services import changed_fields, log_audit
from .models import Category, InventoryItem, StockSnapshot
import logging

logger = logging.getLogger(__name__)


ITEM_AUDIT_FIELDS = [
    'name', 'description', 'sku', 'quantity', 'min_quantity',
    'unit', 'category_id', 'status', 'cost_price', 'sell_price',
    'location', 'image_url',
]

CATEGORY_AUDIT_FIELDS = ['name', 'description', 'color']


def _field_values(instance, fields):
    return {name: getattr(instance, name) for name in fields}


def _actor(instance):
    """Last editor, else the creator. None is logged as System."""
    return instance.updated_by or instance.created_by


def _stored_values(model, pk, fields):
    """Tracked field values as currently stored, or None for new rows."""
    if not pk:
        return None
    return model.objects.filter(pk=pk).values(*fields).first()


# ============================================
# INVENTORY ITEM SIGNALS
# ============================================

@receiver(pre_save, sender=InventoryItem)
def item_pre_save(sender, instance, **kwargs):
    """
    Remember the stored values so post_save can audit only what changed.
    """
    instance._audit_previous = _stored_values(InventoryItem, instance.pk, ITEM_AUDIT_FIELDS)

    if not instance.pk:
        logger.info(f"Creating new inventory item: {instance.name} ({instance.sku})")


@receiver(post_save, sender=InventoryItem)
def item_post_save(sender, instance, created, **kwargs):
    """
    Write the audit trail for item changes.

    - created: 'create' with the headline fields
    - only status changed: 'status_change'
    - anything else tracked changed: 'update' with the changed fields

    The actor is updated_by, falling back to created_by.
    """
    actor = _actor(instance)

    if created:
        log_audit(
            user=actor,
            action='create',
            entity_type='inventory_item',
            entity_id=instance.pk,
            new_values={
                'name': instance.name,
                'sku': instance.sku,
                'quantity': instance.quantity,
                'status': instance.status,
            },
        )
        return

    previous = getattr(instance, '_audit_previous', None)
    if previous is None:
        return

    old_values, new_values = changed_fields(
        previous, _field_values(instance, ITEM_AUDIT_FIELDS), ITEM_AUDIT_FIELDS
    )
    if not new_values:
        return

    action = 'status_change' if list(new_values) == ['status'] else 'update'
    log_audit(
        user=actor,
        action=action,
        entity_type='inventory_item',
        entity_id=instance.pk,
        old_values=old_values,
        new_values=new_values,
    )


@receiver(post_delete, sender=InventoryItem)
def item_post_delete(sender, instance, **kwargs):
    log_audit(
        user=_actor(instance),
        action='delete',
        entity_type='inventory_item',
        entity_id=instance.pk,
        old_values={'name': instance.name, 'sku': instance.sku},
    )


# ============================================
# LOW STOCK ALERTS
# ============================================

@receiver(post_save, sender=InventoryItem)
def check_low_stock_alert(sender, instance, **kwargs):
    """
    Warn when an item sits at or below its minimum quantity.
    """
    if not settings.INVENTORY_CONFIG.get('ENABLE_STOCK_ALERTS', True):
        return

    if instance.status == 'discontinued':
        return

    if instance.quantity == 0:
        logger.error(
            f"OUT OF STOCK: {instance.name} ({instance.sku}) is out of stock"
        )
    elif instance.is_low_stock:
        logger.warning(
            f"LOW STOCK ALERT: {instance.name} ({instance.sku}) "
            f"has only {instance.quantity} {instance.unit} remaining "
            f"(minimum {instance.min_quantity})"
        )


# ============================================
# CATEGORY SIGNALS
# ============================================

@receiver(pre_save, sender=Category)
def category_pre_save(sender, instance, **kwargs):
    instance._audit_previous = _stored_values(Category, instance.pk, CATEGORY_AUDIT_FIELDS)


@receiver(post_save, sender=Category)
def category_post_save(sender, instance, created, **kwargs):
    if created:
        log_audit(
            user=_actor(instance),
            action='create',
            entity_type='category',
            entity_id=instance.pk,
            new_values={'name': instance.name},
        )
        return

    previous = getattr(instance, '_audit_previous', None)
    if previous is None:
        return

    old_values, new_values = changed_fields(
        previous, _field_values(instance, CATEGORY_AUDIT_FIELDS), CATEGORY_AUDIT_FIELDS
    )
    if new_values:
        log_audit(
            user=_actor(instance),
            action='update',
            entity_type='category',
            entity_id=instance.pk,
            old_values=old_values,
            new_values=new_values,
        )


@receiver(post_delete, sender=Category)
def category_post_delete(sender, instance, **kwargs):
    log_audit(
        user=_actor(instance),
        action='delete',
        entity_type='category',
        entity_id=instance.pk,
        old_values={'name': instance.name},
    )


# ============================================
# SNAPSHOT SIGNALS
# ============================================

@receiver(post_delete, sender=StockSnapshot)
def log_snapshot_deletion(sender, instance, **kwargs):
    """
    Snapshots are append-only and should only disappear together with
    their item.
    """
    logger.warning(
        f"[AUDIT ALERT] Stock snapshot DELETED: "
        f"Item: {instance.item_id} | "
        f"Date: {instance.snapshot_date} | "
        f"Quantity: {instance.quantity}"
    )
