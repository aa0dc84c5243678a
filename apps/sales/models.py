from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.operations.models import PaymentMethod


class SaleStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    PARTIAL = 'PARTIAL', 'Partially paid'
    COMPLETED = 'COMPLETED', 'Completed'


class Sale(models.Model):
    """Sale of product to a client, paid in one or more installments."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    sale_number = models.CharField(max_length=20, unique=True)
    status = models.CharField(
        max_length=10,
        choices=SaleStatus.choices,
        default=SaleStatus.PENDING,
    )

    client = models.ForeignKey(
        'directory.Client',
        on_delete=models.PROTECT,
        related_name='sales',
    )
    product = models.ForeignKey(
        'directory.Product',
        on_delete=models.PROTECT,
        related_name='sales',
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='sales',
    )

    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))],
    )
    price_per_unit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    total_amount = models.DecimalField(max_digits=14, decimal_places=2)
    description = models.TextField(blank=True)

    sale_date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        db_table = 'sales'
        indexes = [
            models.Index(fields=['user', 'status'], name='sales_user_status_idx'),
            models.Index(fields=['client'], name='sales_client_idx'),
        ]
        ordering = ['-sale_date', '-created_at']

    def __str__(self):
        return f"{self.sale_number} ({self.status})"


class SalePayment(models.Model):
    """Installment received for a sale. Immutable once created."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    sale = models.ForeignKey(
        Sale,
        on_delete=models.CASCADE,
        related_name='payments',
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    payment_method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )
    description = models.TextField(blank=True)
    payment_date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sale_payments'
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name='sale_payment_amount_positive'),
        ]
        ordering = ['-payment_date', '-created_at']

    def __str__(self):
        return f"{self.amount} for {self.sale_id}"
