from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
import logging
import traceback

from inventory.models import InventoryItem
from . import services
from .serializers import ForecastSerializer, OverviewSerializer, TrendPointSerializer


logger = logging.getLogger(__name__)


def server_error():
    return Response(
        {'error': 'Internal server error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# ====================================
# FORECAST
# ====================================

class ItemForecastView(APIView):
    """Demand forecast for one item over the last 30 days of snapshots"""

    def get(self, request, item_id):
        try:
            result = services.forecast_item(item_id)
        except InventoryItem.DoesNotExist:
            return Response({'error': 'Item not found'}, status=status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.error(f"Forecast error for item {item_id}: {str(e)}\n{traceback.format_exc()}")
            return server_error()

        return Response({'data': ForecastSerializer(result).data})


# ====================================
# TRENDS
# ====================================

class StockTrendsView(APIView):
    """Daily totals across all items over the last 30 days"""

    def get(self, request):
        try:
            trends = services.stock_trends()
        except Exception as e:
            logger.error(f"Trend aggregation error: {str(e)}\n{traceback.format_exc()}")
            return server_error()

        return Response({'data': TrendPointSerializer(trends, many=True).data})


# ====================================
# OVERVIEW
# ====================================

class OverviewView(APIView):
    """Dashboard statistics"""

    def get(self, request):
        try:
            overview = services.build_overview()
        except Exception as e:
            logger.error(f"Overview error: {str(e)}\n{traceback.format_exc()}")
            return server_error()

        return Response({'data': OverviewSerializer(overview).data})
