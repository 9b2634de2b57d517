from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    path('forecast/<int:item_id>/', views.ItemForecastView.as_view(), name='item-forecast'),
    path('trends/', views.StockTrendsView.as_view(), name='stock-trends'),
    path('overview/', views.OverviewView.as_view(), name='overview'),
]
