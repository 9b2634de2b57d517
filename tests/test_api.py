from datetime import timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from inventory.models import StockSnapshot


@pytest.mark.django_db
class TestForecastEndpoint:
    def test_forecast_payload(self, api_client, make_item, record_history):
        item = make_item(name='Drill', quantity=70, min_quantity=10)
        record_history(item, [100, 90, 80, 70], timezone.localdate())

        response = api_client.get(reverse('analytics:item-forecast', args=[item.pk]))

        assert response.status_code == 200
        data = response.json()['data']
        assert data['itemId'] == item.pk
        assert data['itemName'] == 'Drill'
        assert data['currentQuantity'] == 70
        assert data['minQuantity'] == 10
        assert data['avgDailyConsumption'] == 10.0
        assert data['predictedDaysUntilStockout'] == 7
        assert data['reorderSuggested'] is True

        trend = data['trendData']
        assert len(trend) == 18
        assert 'predicted' not in trend[3]
        assert trend[3]['quantity'] == 70
        assert trend[4] == {
            'date': (timezone.localdate() + timedelta(days=1)).isoformat(),
            'quantity': 60,
            'predicted': 60,
        }

    def test_item_without_history(self, api_client, make_item):
        item = make_item()

        response = api_client.get(reverse('analytics:item-forecast', args=[item.pk]))

        data = response.json()['data']
        assert data['predictedDaysUntilStockout'] == -1
        assert data['reorderSuggested'] is False
        assert data['trendData'] == []

    def test_unknown_item(self, api_client):
        response = api_client.get('/api/analytics/forecast/999999/')

        assert response.status_code == 404
        assert response.json() == {'error': 'Item not found'}

    def test_engine_failure_is_500(self, api_client, make_item, monkeypatch):
        item = make_item()

        def broken(*args, **kwargs):
            raise RuntimeError('boom')

        monkeypatch.setattr('analytics.services.forecast', broken)
        response = api_client.get(reverse('analytics:item-forecast', args=[item.pk]))

        assert response.status_code == 500
        assert response.json() == {'error': 'Internal server error'}


@pytest.mark.django_db
class TestTrendsEndpoint:
    def test_trends_payload(self, api_client, make_item):
        today = timezone.localdate()
        cheap = make_item(sell_price=Decimal('2.00'), min_quantity=10)
        dear = make_item(sell_price=Decimal('10.00'), min_quantity=1)
        StockSnapshot.objects.create(item=cheap, snapshot_date=today, quantity=5)
        StockSnapshot.objects.create(item=dear, snapshot_date=today, quantity=3)
        StockSnapshot.objects.create(item=dear, snapshot_date=today - timedelta(days=45), quantity=3)

        response = api_client.get(reverse('analytics:stock-trends'))

        assert response.status_code == 200
        assert response.json() == {
            'data': [{
                'date': today.isoformat(),
                'totalQuantity': 8,
                'totalValue': 40.0,
                'lowStockCount': 1,
            }]
        }

    def test_no_snapshots(self, api_client):
        response = api_client.get(reverse('analytics:stock-trends'))

        assert response.json() == {'data': []}


@pytest.mark.django_db
class TestOverviewEndpoint:
    def test_overview_payload(self, api_client, make_item):
        make_item(quantity=5, min_quantity=10, sell_price=Decimal('2.00'))
        make_item(quantity=3, min_quantity=1, sell_price=Decimal('10.00'))

        response = api_client.get(reverse('analytics:overview'))

        assert response.status_code == 200
        data = response.json()['data']
        assert data['totalItems'] == 2
        assert data['lowStockItems'] == 1
        assert data['totalCategories'] == 1
        assert data['totalValue'] == 40.0
        assert data['statusBreakdown'] == [
            {'status': 'in_stock', 'count': 1},
            {'status': 'low_stock', 'count': 1},
        ]

        latest = data['recentActivity'][0]
        assert latest['action'] == 'create'
        assert latest['entity_type'] == 'inventory_item'
        assert latest['user']['username'] == 'alice'
        assert latest['user']['role'] == 'viewer'


@pytest.mark.django_db
@pytest.mark.parametrize('name,args', [
    ('analytics:item-forecast', [1]),
    ('analytics:stock-trends', []),
    ('analytics:overview', []),
])
def test_endpoints_require_authentication(name, args):
    response = APIClient().get(reverse(name, args=args))

    assert response.status_code in (401, 403)
