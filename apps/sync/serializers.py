from decimal import Decimal

from rest_framework import serializers

from apps.directory.serializers import ClientSerializer, ProductSerializer, ProviderSerializer
from apps.finance.models import ExpenseType, Scope
from apps.finance.serializers import ExpenseSerializer, IncomeSerializer
from apps.operations.models import (
    MoneyMovementType,
    OperationStatus,
    PaymentMethod,
    ProductMovementType,
)
from apps.operations.serializers import OperationSerializer
from apps.organizations.serializers import OrganizationSerializer
from .models import SyncLog

COLLECTIONS = (
    'providers',
    'clients',
    'products',
    'operations',
    'money_movements',
    'product_movements',
    'expenses',
    'incomes',
)


# =============================================================================
# Push: per-record input
# =============================================================================

class SyncRecordSerializer(serializers.Serializer):
    """
    Common fields of every pushed record.

    The client generates ``id``; ``created_at`` defaults to ``updated_at``.
    """

    id = serializers.UUIDField()
    created_at = serializers.DateTimeField(required=False)
    updated_at = serializers.DateTimeField()

    def validate(self, attrs):
        attrs.setdefault('created_at', attrs['updated_at'])
        return attrs


class ProviderRecordSerializer(SyncRecordSerializer):
    name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    organization_id = serializers.UUIDField(required=False, allow_null=True)


class ClientRecordSerializer(SyncRecordSerializer):
    name = serializers.CharField(max_length=200)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class ProductRecordSerializer(SyncRecordSerializer):
    name = serializers.CharField(max_length=200)
    unit = serializers.CharField(max_length=20, required=False)
    description = serializers.CharField(required=False, allow_blank=True)


class OperationRecordSerializer(SyncRecordSerializer):
    operation_number = serializers.CharField(max_length=20, required=False)
    status = serializers.ChoiceField(choices=OperationStatus.choices, default=OperationStatus.OPEN)
    provider_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    organization_id = serializers.UUIDField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    price_per_unit = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    agreed_quantity = serializers.DecimalField(
        max_digits=14, decimal_places=3, min_value=Decimal('0'), required=False, allow_null=True,
    )
    total_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True,
    )
    operation_date = serializers.DateTimeField(required=False)
    closed_at = serializers.DateTimeField(required=False, allow_null=True)


class MoneyMovementRecordSerializer(SyncRecordSerializer):
    operation_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    movement_type = serializers.ChoiceField(choices=MoneyMovementType.choices)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    description = serializers.CharField(required=False, allow_blank=True)
    movement_date = serializers.DateTimeField(required=False)


class ProductMovementRecordSerializer(SyncRecordSerializer):
    operation_id = serializers.UUIDField()
    movement_type = serializers.ChoiceField(choices=ProductMovementType.choices)
    net_weight = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True)
    gross_weight = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True)
    tare = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    movement_date = serializers.DateTimeField(required=False)


class ExpenseRecordSerializer(SyncRecordSerializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    scope = serializers.ChoiceField(choices=Scope.choices, required=False)
    expense_type = serializers.ChoiceField(choices=ExpenseType.choices, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    expense_date = serializers.DateTimeField(required=False)
    operation_id = serializers.UUIDField(required=False, allow_null=True)


class IncomeRecordSerializer(SyncRecordSerializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    scope = serializers.ChoiceField(choices=Scope.choices, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    income_date = serializers.DateTimeField(required=False)


# =============================================================================
# Push / Pull requests
# =============================================================================

def _collection_field():
    return serializers.ListField(child=serializers.DictField(), required=False, default=list)


class PushRequestSerializer(serializers.Serializer):
    """
    Batch of client changes keyed by collection.

    Records are only checked to be objects here; each one is validated on
    its own during the push so that one bad record does not reject the batch.
    """

    providers = _collection_field()
    clients = _collection_field()
    products = _collection_field()
    operations = _collection_field()
    money_movements = _collection_field()
    product_movements = _collection_field()
    expenses = _collection_field()
    incomes = _collection_field()

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.fields)
        if unknown:
            raise serializers.ValidationError({
                key: 'Unknown collection.' for key in sorted(unknown)
            })
        return attrs


class PullQuerySerializer(serializers.Serializer):
    since = serializers.DateTimeField(required=False)


# =============================================================================
# Output
# =============================================================================

class CollectionErrorSerializer(serializers.Serializer):
    id = serializers.CharField(allow_null=True)
    error = serializers.CharField()
    code = serializers.CharField()


class CollectionResultSerializer(serializers.Serializer):
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    skipped = serializers.IntegerField()
    errors = CollectionErrorSerializer(many=True)


class PushResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    results = serializers.DictField(child=CollectionResultSerializer())


class PullOperationSerializer(OperationSerializer):
    """Operation with movements and the caller's operation-scoped expenses."""

    expenses = ExpenseSerializer(many=True, read_only=True)

    class Meta(OperationSerializer.Meta):
        fields = OperationSerializer.Meta.fields + ['expenses']
        read_only_fields = fields


class PullDataSerializer(serializers.Serializer):
    operations = PullOperationSerializer(many=True)
    providers = ProviderSerializer(many=True)
    clients = ClientSerializer(many=True)
    expenses = ExpenseSerializer(many=True)
    incomes = IncomeSerializer(many=True)
    products = ProductSerializer(many=True)
    organizations = OrganizationSerializer(many=True)


class PullResponseSerializer(serializers.Serializer):
    data = PullDataSerializer()
    sync_timestamp = serializers.DateTimeField()


class SyncLogSerializer(serializers.ModelSerializer):

    class Meta:
        model = SyncLog
        fields = [
            'id',
            'sync_type',
            'device_id',
            'records_count',
            'status',
            'error_message',
            'created_at',
        ]
        read_only_fields = fields


class SyncStatusSerializer(serializers.Serializer):
    last_sync = serializers.DateTimeField(allow_null=True)
    history = SyncLogSerializer(many=True)
