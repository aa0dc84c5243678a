from decimal import Decimal

from rest_framework import serializers

from apps.operations.models import PaymentMethod
from .models import Sale, SalePayment, SaleStatus


class SaleFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SaleStatus.choices, required=False)
    client = serializers.UUIDField(required=False)


class SaleCreateSerializer(serializers.Serializer):
    """Input for registering a sale."""

    client_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=3, min_value=Decimal('0.001'))
    price_per_unit = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    description = serializers.CharField(required=False, allow_blank=True)
    sale_date = serializers.DateTimeField(required=False)


class SalePaymentInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    description = serializers.CharField(required=False, allow_blank=True)
    payment_date = serializers.DateTimeField(required=False)


class SalePaymentSerializer(serializers.ModelSerializer):

    class Meta:
        model = SalePayment
        fields = ['id', 'sale', 'amount', 'payment_method', 'description', 'payment_date', 'created_at']
        read_only_fields = fields


class SaleSerializer(serializers.ModelSerializer):
    """Sale with its payments."""

    client_name = serializers.CharField(source='client.name', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    payments = SalePaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Sale
        fields = [
            'id',
            'sale_number',
            'status',
            'client',
            'client_name',
            'product',
            'product_name',
            'quantity',
            'price_per_unit',
            'total_amount',
            'description',
            'sale_date',
            'payments',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SaleSummarySerializer(serializers.Serializer):
    """Serializer for sale payment summary."""

    total = serializers.DecimalField(max_digits=None, decimal_places=2)
    paid = serializers.DecimalField(max_digits=None, decimal_places=2)
    outstanding = serializers.DecimalField(max_digits=None, decimal_places=2)
    status = serializers.ChoiceField(choices=SaleStatus.choices)
