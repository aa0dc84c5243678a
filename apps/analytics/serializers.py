from rest_framework import serializers


class DashboardQuerySerializer(serializers.Serializer):
    organization = serializers.UUIDField(required=False)


class DashboardSummarySerializer(serializers.Serializer):
    total_operations = serializers.IntegerField()
    open_operations = serializers.IntegerField()
    closed_operations = serializers.IntegerField()
    total_providers = serializers.IntegerField()
    total_expenses = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_incomes = serializers.DecimalField(max_digits=None, decimal_places=2)


class DashboardFinancialSerializer(serializers.Serializer):
    total_amount = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_advances = serializers.DecimalField(max_digits=None, decimal_places=2)
    pending_balance = serializers.DecimalField(max_digits=None, decimal_places=2)
    average_price = serializers.DecimalField(max_digits=None, decimal_places=2)


class DashboardVolumeSerializer(serializers.Serializer):
    total_volume = serializers.DecimalField(max_digits=None, decimal_places=3)
    total_delivered = serializers.DecimalField(max_digits=None, decimal_places=3)
    pending_volume = serializers.DecimalField(max_digits=None, decimal_places=3)


class TopProviderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    operation_count = serializers.IntegerField()
    total_volume = serializers.DecimalField(max_digits=None, decimal_places=3)
    total_amount = serializers.DecimalField(max_digits=None, decimal_places=2)


class DashboardSerializer(serializers.Serializer):
    """Serializer for dashboard metrics."""

    summary = DashboardSummarySerializer()
    financial = DashboardFinancialSerializer()
    volume = DashboardVolumeSerializer()
    top_providers = TopProviderSerializer(many=True)
