from rest_framework import serializers

from audit.models import AuditLog
from users.models import Profile


class TrendEntrySerializer(serializers.Serializer):
    """Historical point, or projected point when 'predicted' is present"""

    date = serializers.CharField()
    quantity = serializers.IntegerField()
    predicted = serializers.IntegerField(required=False, allow_null=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get('predicted') is None:
            data.pop('predicted', None)
        return data


class ForecastSerializer(serializers.Serializer):
    """Forecast engine result in the shape the charts expect"""

    itemId = serializers.ReadOnlyField(source='item_id')
    itemName = serializers.CharField(source='item_name')
    currentQuantity = serializers.IntegerField(source='current_quantity')
    minQuantity = serializers.IntegerField(source='min_quantity')
    avgDailyConsumption = serializers.FloatField(source='avg_daily_consumption')
    predictedDaysUntilStockout = serializers.IntegerField(source='stockout_days_or_sentinel')
    reorderSuggested = serializers.BooleanField(source='reorder_suggested')
    trendData = TrendEntrySerializer(source='trend_series', many=True)


class TrendPointSerializer(serializers.Serializer):
    date = serializers.CharField()
    totalQuantity = serializers.IntegerField(source='total_quantity')
    totalValue = serializers.FloatField(source='total_value')
    lowStockCount = serializers.IntegerField(source='low_stock_count')


class ProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)

    class Meta:
        model = Profile
        fields = ['id', 'username', 'full_name', 'role', 'avatar_url', 'created_at', 'updated_at']


class AuditLogSerializer(serializers.ModelSerializer):
    user = serializers.SerializerMethodField()

    class Meta:
        model = AuditLog
        fields = [
            'id',
            'user_id',
            'action',
            'entity_type',
            'entity_id',
            'old_values',
            'new_values',
            'created_at',
            'user',
        ]

    def get_user(self, obj):
        """Profile of the acting user, None for system entries"""
        if obj.user is None:
            return None
        try:
            return ProfileSerializer(obj.user.profile).data
        except Profile.DoesNotExist:
            return None


class StatusCountSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()


class OverviewSerializer(serializers.Serializer):
    totalItems = serializers.IntegerField(source='total_items')
    lowStockItems = serializers.IntegerField(source='low_stock_items')
    totalCategories = serializers.IntegerField(source='total_categories')
    totalValue = serializers.FloatField(source='total_value')
    recentActivity = AuditLogSerializer(source='recent_activity', many=True)
    statusBreakdown = StatusCountSerializer(source='status_breakdown', many=True)
