import pytest
from django.contrib import admin
from django.contrib.auth.models import User
from django.test import RequestFactory

from audit.models import AuditLog
from inventory.admin import export_to_csv, mark_as_discontinued, mark_as_ordered
from inventory.models import Category, InventoryItem


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(username='root', password='s3cret-pass', email='root@example.com')


@pytest.fixture
def admin_request(admin_user):
    request = RequestFactory().post('/admin/')
    request.user = admin_user
    return request


def model_admin(model):
    return admin.site._registry[model]


def item_entries(item, action):
    return AuditLog.objects.filter(entity_type='inventory_item', entity_id=str(item.pk), action=action)


@pytest.mark.django_db
class TestItemActions:
    def test_status_actions_audit_each_row_as_request_user(self, make_item, admin_request, admin_user):
        drill = make_item()
        saw = make_item()

        mark_as_discontinued(model_admin(InventoryItem), admin_request, InventoryItem.objects.all())

        for item in (drill, saw):
            item.refresh_from_db()
            assert item.status == 'discontinued'
            assert item.updated_by == admin_user

            [entry] = item_entries(item, 'status_change')
            assert entry.user == admin_user
            assert entry.new_values == {'status': 'discontinued'}

    def test_mark_as_ordered(self, make_item, admin_request):
        item = make_item()

        mark_as_ordered(model_admin(InventoryItem), admin_request, InventoryItem.objects.filter(pk=item.pk))

        item.refresh_from_db()
        assert item.status == 'ordered'
        assert item_entries(item, 'status_change').count() == 1

    def test_export_to_csv(self, make_item, admin_request):
        make_item(sku='TL-0042', name='Mitre Saw')

        response = export_to_csv(model_admin(InventoryItem), admin_request, InventoryItem.objects.all())

        assert response['Content-Type'] == 'text/csv'
        body = response.content.decode()
        header, row = body.splitlines()[:2]
        assert 'sku' in header.split(',')
        assert 'TL-0042' in row
        assert 'Mitre Saw' in row


@pytest.mark.django_db
class TestAdminActors:
    def test_item_delete_is_charged_to_admin(self, make_item, admin_request, admin_user):
        item = make_item()
        item_id = item.pk

        model_admin(InventoryItem).delete_model(admin_request, item)

        entry = AuditLog.objects.get(entity_type='inventory_item', entity_id=str(item_id), action='delete')
        assert entry.user == admin_user

    def test_bulk_item_delete_is_charged_to_admin(self, make_item, admin_request, admin_user):
        ids = [make_item().pk, make_item().pk]

        model_admin(InventoryItem).delete_queryset(admin_request, InventoryItem.objects.filter(pk__in=ids))

        assert not InventoryItem.objects.filter(pk__in=ids).exists()
        entries = AuditLog.objects.filter(entity_type='inventory_item', action='delete')
        assert sorted(int(e.entity_id) for e in entries) == sorted(ids)
        assert all(e.user == admin_user for e in entries)

    def test_category_edit_is_charged_to_admin(self, category, admin_request, admin_user):
        category.description = 'Hand and power tools'

        model_admin(Category).save_model(admin_request, category, form=None, change=True)

        category.refresh_from_db()
        assert category.updated_by == admin_user
        entry = AuditLog.objects.get(entity_type='category', entity_id=str(category.pk), action='update')
        assert entry.user == admin_user

    def test_category_delete_is_charged_to_admin(self, category, admin_request, admin_user):
        category_id = category.pk

        model_admin(Category).delete_model(admin_request, category)

        entry = AuditLog.objects.get(entity_type='category', entity_id=str(category_id), action='delete')
        assert entry.user == admin_user
