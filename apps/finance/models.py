from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class Scope(models.TextChoices):
    BUSINESS = 'BUSINESS', 'Business'
    PERSONAL = 'PERSONAL', 'Personal'


class ExpenseType(models.TextChoices):
    FREIGHT = 'FREIGHT', 'Freight'
    TRANSPORT = 'TRANSPORT', 'Transport'
    FOOD = 'FOOD', 'Food'
    OTHER = 'OTHER', 'Other'


class FinanceQuerySet(models.QuerySet):

    def owned_by(self, user):
        return self.filter(user=user)


class Expense(models.Model):
    """Outgoing cost, optionally charged to an operation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=True)
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    scope = models.CharField(max_length=10, choices=Scope.choices, default=Scope.BUSINESS)
    expense_type = models.CharField(max_length=10, choices=ExpenseType.choices, default=ExpenseType.OTHER)
    description = models.TextField(blank=True)
    expense_date = models.DateTimeField(default=timezone.now)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='expenses',
    )
    # Kept when the operation is deleted
    operation = models.ForeignKey(
        'operations.Operation',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    objects = FinanceQuerySet.as_manager()

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['user', 'updated_at'], name='expenses_user_updated_idx'),
            models.Index(fields=['operation'], name='expenses_operation_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name='expense_amount_positive'),
        ]
        ordering = ['-expense_date', '-created_at']

    def __str__(self):
        return f"{self.get_expense_type_display()} {self.amount}"


class Income(models.Model):
    """Incoming money not tied to a sale."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=True)
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    scope = models.CharField(max_length=10, choices=Scope.choices, default=Scope.PERSONAL)
    description = models.TextField(blank=True)
    income_date = models.DateTimeField(default=timezone.now)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='incomes',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    objects = FinanceQuerySet.as_manager()

    class Meta:
        db_table = 'incomes'
        indexes = [
            models.Index(fields=['user', 'updated_at'], name='incomes_user_updated_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name='income_amount_positive'),
        ]
        ordering = ['-income_date', '-created_at']

    def __str__(self):
        return f"Income {self.amount} ({self.scope})"
