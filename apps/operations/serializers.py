from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import (
    MoneyMovement,
    MoneyMovementType,
    Operation,
    OperationStatus,
    PaymentMethod,
    ProductMovement,
    ProductMovementType,
)


# =============================================================================
# Input Serializers
# =============================================================================

class OperationFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for operation filtering.

    Query Parameters:
        status (str): OPEN or CLOSED
        provider (UUID): Filter by provider ID
        organization (UUID): Filter by organization ID
        search (str): Match operation number or description
    """

    status = serializers.ChoiceField(choices=OperationStatus.choices, required=False)
    provider = serializers.UUIDField(required=False)
    organization = serializers.UUIDField(required=False)
    search = serializers.CharField(max_length=100, required=False)


class OperationCreateSerializer(serializers.Serializer):
    """Input for opening an operation."""

    provider_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    price_per_unit = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    agreed_quantity = serializers.DecimalField(
        max_digits=14, decimal_places=3, min_value=Decimal('0'), required=False, allow_null=True,
    )
    total_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True,
    )
    description = serializers.CharField(required=False, allow_blank=True)
    organization_id = serializers.UUIDField(required=False, allow_null=True)
    operation_date = serializers.DateTimeField(required=False)


class OperationUpdateSerializer(serializers.Serializer):
    """Input for editing an open operation's agreement."""

    description = serializers.CharField(required=False, allow_blank=True)
    price_per_unit = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0'), required=False,
    )
    agreed_quantity = serializers.DecimalField(
        max_digits=14, decimal_places=3, min_value=Decimal('0'), required=False, allow_null=True,
    )
    total_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True,
    )


class MoneyMovementInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    movement_type = serializers.ChoiceField(choices=MoneyMovementType.choices)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    description = serializers.CharField(required=False, allow_blank=True)
    movement_date = serializers.DateTimeField(required=False)


class ProductMovementInputSerializer(serializers.Serializer):
    """Weights for a product movement; net may be derived from gross - tare."""

    movement_type = serializers.ChoiceField(choices=ProductMovementType.choices)
    net_weight = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True)
    gross_weight = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True)
    tare = serializers.DecimalField(max_digits=14, decimal_places=3, required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    movement_date = serializers.DateTimeField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class MoneyMovementSerializer(serializers.ModelSerializer):

    class Meta:
        model = MoneyMovement
        fields = [
            'id',
            'operation',
            'amount',
            'movement_type',
            'payment_method',
            'description',
            'movement_date',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProductMovementSerializer(serializers.ModelSerializer):

    class Meta:
        model = ProductMovement
        fields = [
            'id',
            'operation',
            'net_weight',
            'gross_weight',
            'tare',
            'movement_type',
            'description',
            'movement_date',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OperationListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for operation lists."""

    provider_name = serializers.CharField(source='provider.name', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = Operation
        fields = [
            'id',
            'operation_number',
            'status',
            'provider',
            'provider_name',
            'product',
            'product_name',
            'organization',
            'price_per_unit',
            'agreed_quantity',
            'total_amount',
            'operation_date',
            'closed_at',
            'updated_at',
        ]
        read_only_fields = fields


class OperationSerializer(serializers.ModelSerializer):
    """Full operation with its movements."""

    user = UserPublicSerializer(read_only=True)
    provider_name = serializers.CharField(source='provider.name', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    money_movements = MoneyMovementSerializer(many=True, read_only=True)
    product_movements = ProductMovementSerializer(many=True, read_only=True)

    class Meta:
        model = Operation
        fields = [
            'id',
            'operation_number',
            'status',
            'provider',
            'provider_name',
            'product',
            'product_name',
            'user',
            'organization',
            'description',
            'price_per_unit',
            'agreed_quantity',
            'total_amount',
            'operation_date',
            'closed_at',
            'money_movements',
            'product_movements',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BalanceSerializer(serializers.Serializer):
    """Serializer for a computed operation balance."""

    total_agreed_money = serializers.DecimalField(max_digits=None, decimal_places=2)
    agreed_quantity = serializers.DecimalField(max_digits=None, decimal_places=3)
    total_advances = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_delivered = serializers.DecimalField(max_digits=None, decimal_places=3)
    money_balance = serializers.DecimalField(max_digits=None, decimal_places=2)
    product_balance = serializers.DecimalField(max_digits=None, decimal_places=3)
    money_progress = serializers.DecimalField(max_digits=None, decimal_places=2)
    product_progress = serializers.DecimalField(max_digits=None, decimal_places=2)
    money_by_type = serializers.DictField(child=serializers.DecimalField(max_digits=None, decimal_places=2))
    product_by_type = serializers.DictField(child=serializers.DecimalField(max_digits=None, decimal_places=3))
