from decimal import Decimal

from rest_framework import serializers

from .models import Expense, ExpenseType, Income, Scope


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for expense filtering.

    Query Parameters:
        scope (str): BUSINESS or PERSONAL
        expense_type (str): FREIGHT, TRANSPORT, FOOD or OTHER
        operation (UUID): Expenses charged to this operation
        general (bool): Only expenses without an operation
    """

    scope = serializers.ChoiceField(choices=Scope.choices, required=False)
    expense_type = serializers.ChoiceField(choices=ExpenseType.choices, required=False)
    operation = serializers.UUIDField(required=False)
    general = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if attrs.get('operation') and attrs.get('general'):
            raise serializers.ValidationError({
                'general': 'Cannot combine general=true with an operation filter'
            })
        return attrs


class IncomeFilterSerializer(serializers.Serializer):
    scope = serializers.ChoiceField(choices=Scope.choices, required=False)


class ExpenseInputSerializer(serializers.Serializer):
    """Input for creating or updating an expense."""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    scope = serializers.ChoiceField(choices=Scope.choices, default=Scope.BUSINESS)
    expense_type = serializers.ChoiceField(choices=ExpenseType.choices, default=ExpenseType.OTHER)
    description = serializers.CharField(required=False, allow_blank=True)
    expense_date = serializers.DateTimeField(required=False)
    operation_id = serializers.UUIDField(required=False, allow_null=True)


class IncomeInputSerializer(serializers.Serializer):
    """Input for creating or updating an income."""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    scope = serializers.ChoiceField(choices=Scope.choices, default=Scope.PERSONAL)
    description = serializers.CharField(required=False, allow_blank=True)
    income_date = serializers.DateTimeField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenseSerializer(serializers.ModelSerializer):

    operation_number = serializers.CharField(
        source='operation.operation_number', read_only=True, default=None,
    )

    class Meta:
        model = Expense
        fields = [
            'id',
            'amount',
            'scope',
            'expense_type',
            'description',
            'expense_date',
            'operation',
            'operation_number',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class IncomeSerializer(serializers.ModelSerializer):

    class Meta:
        model = Income
        fields = ['id', 'amount', 'scope', 'description', 'income_date', 'created_at', 'updated_at']
        read_only_fields = fields


class ScopeTotalsSerializer(serializers.Serializer):
    BUSINESS = serializers.DecimalField(max_digits=None, decimal_places=2)
    PERSONAL = serializers.DecimalField(max_digits=None, decimal_places=2)
    total = serializers.DecimalField(max_digits=None, decimal_places=2)


class FinanceSummarySerializer(serializers.Serializer):
    """Serializer for expense and income totals."""

    expenses = ScopeTotalsSerializer()
    incomes = ScopeTotalsSerializer()
    net = serializers.DecimalField(max_digits=None, decimal_places=2)
