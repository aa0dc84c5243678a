from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.organizations.models import Organization


class OperationStatus(models.TextChoices):
    OPEN = 'OPEN', 'Open'
    CLOSED = 'CLOSED', 'Closed'


class MoneyMovementType(models.TextChoices):
    ADVANCE = 'ADVANCE', 'Advance'
    PAYMENT = 'PAYMENT', 'Payment'
    ADJUSTMENT = 'ADJUSTMENT', 'Adjustment'
    DISCOUNT = 'DISCOUNT', 'Discount'


class ProductMovementType(models.TextChoices):
    DELIVERY = 'DELIVERY', 'Delivery'
    ADJUSTMENT = 'ADJUSTMENT', 'Adjustment'
    LOSS = 'LOSS', 'Loss'


class PaymentMethod(models.TextChoices):
    CASH = 'CASH', 'Cash'
    TRANSFER = 'TRANSFER', 'Transfer'


class OperationQuerySet(models.QuerySet):

    def accessible_to(self, user):
        """Operations the user owns or that belong to one of their organizations."""
        return self.filter(
            Q(user=user) | Q(organization__in=Organization.objects.for_member(user))
        )

    def open(self):
        return self.filter(status=OperationStatus.OPEN)


class Operation(models.Model):
    """Purchase contract with a provider for a product."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    operation_number = models.CharField(max_length=20, unique=True)
    status = models.CharField(
        max_length=10,
        choices=OperationStatus.choices,
        default=OperationStatus.OPEN,
    )

    provider = models.ForeignKey(
        'directory.Provider',
        on_delete=models.PROTECT,
        related_name='operations',
    )
    product = models.ForeignKey(
        'directory.Product',
        on_delete=models.PROTECT,
        related_name='operations',
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='operations',
    )
    organization = models.ForeignKey(
        'organizations.Organization',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='operations',
    )

    description = models.TextField(blank=True)

    # Agreement
    price_per_unit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    agreed_quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'))],
    )
    # Explicitly agreed total; when empty the total is quantity x price
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'))],
    )

    operation_date = models.DateTimeField(default=timezone.now)
    closed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    objects = OperationQuerySet.as_manager()

    class Meta:
        db_table = 'operations'
        indexes = [
            models.Index(fields=['user', 'status'], name='operations_user_status_idx'),
            models.Index(fields=['user', 'updated_at'], name='operations_user_updated_idx'),
            models.Index(fields=['provider', 'status'], name='operations_prov_status_idx'),
        ]
        ordering = ['-operation_date', '-created_at']

    def __str__(self):
        return f"{self.operation_number} ({self.status})"

    @property
    def is_open(self):
        return self.status == OperationStatus.OPEN

    def get_balance(self):
        """Balance computed from the stored movements."""
        from apps.operations.services.balance import compute_balance

        return compute_balance(
            self,
            self.money_movements.all(),
            self.product_movements.all(),
        )


class MoneyMovement(models.Model):
    """Monetary event against an operation. Immutable once created."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    operation = models.ForeignKey(
        Operation,
        on_delete=models.CASCADE,
        related_name='money_movements',
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    movement_type = models.CharField(max_length=12, choices=MoneyMovementType.choices)
    payment_method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )
    description = models.TextField(blank=True)
    movement_date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'money_movements'
        indexes = [
            models.Index(fields=['operation', 'movement_date'], name='money_mov_op_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name='money_movement_amount_positive'),
        ]
        ordering = ['-movement_date', '-created_at']

    def __str__(self):
        return f"{self.movement_type} {self.amount} on {self.operation_id}"


class ProductMovement(models.Model):
    """Physical delivery, correction or loss against an operation. Immutable once created."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    operation = models.ForeignKey(
        Operation,
        on_delete=models.CASCADE,
        related_name='product_movements',
    )
    net_weight = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))],
    )
    gross_weight = models.DecimalField(max_digits=14, decimal_places=3, null=True, blank=True)
    tare = models.DecimalField(max_digits=14, decimal_places=3, null=True, blank=True)
    movement_type = models.CharField(max_length=12, choices=ProductMovementType.choices)
    description = models.TextField(blank=True)
    movement_date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product_movements'
        indexes = [
            models.Index(fields=['operation', 'movement_date'], name='product_mov_op_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(net_weight__gt=0), name='product_movement_net_positive'),
        ]
        ordering = ['-movement_date', '-created_at']

    def __str__(self):
        return f"{self.movement_type} {self.net_weight} on {self.operation_id}"
