import json
import logging

from django.core.serializers.json import DjangoJSONEncoder

from .models import AuditLog

logger = logging.getLogger(__name__)


def _jsonable(values):
    """Decimals and dates are not JSON native; store them as strings."""
    if values is None:
        return None
    return json.loads(json.dumps(values, cls=DjangoJSONEncoder))


def log_audit(user, action, entity_type, entity_id, old_values=None, new_values=None):
    """
    Record one audit trail entry.

    Args:
        user: acting user, or None for system changes
        action: one of AuditLog.ACTION_CHOICES
        entity_type: 'inventory_item', 'category' or 'profile'
        entity_id: primary key of the changed row
        old_values / new_values: dicts of the fields that changed
    """
    entry = AuditLog.objects.create(
        user=user,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        old_values=_jsonable(old_values),
        new_values=_jsonable(new_values),
    )

    logger.info(
        f"[AUDIT] {action} {entity_type}:{entity_id} | "
        f"User: {user.username if user else 'System'} | "
        f"Old: {entry.old_values} | New: {entry.new_values}"
    )
    return entry


def changed_fields(old, new, fields):
    """Split tracked fields that differ between two snapshots of a row."""
    old_values = {}
    new_values = {}
    for name in fields:
        if old.get(name) != new.get(name):
            old_values[name] = old.get(name)
            new_values[name] = new.get(name)
    return old_values, new_values
