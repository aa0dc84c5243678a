"""
Expense and income management.

Both are private to their owner. An expense may be charged to an
operation the owner can see (own or shared through an organization);
deleting that operation later detaches the expense instead of removing it.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import QuerySet, Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.finance.models import Expense, Income, Scope
from apps.operations.models import Operation
from apps.operations.services import get_operation_for_user

from .exceptions import ExpenseNotFoundError, IncomeNotFoundError

logger = logging.getLogger(__name__)

EXPENSE_MUTABLE_FIELDS = ('amount', 'scope', 'expense_type', 'description', 'expense_date', 'operation')
INCOME_MUTABLE_FIELDS = ('amount', 'scope', 'description', 'income_date')


def _resolve_operation(operation_id: Optional[UUID], user: User) -> Optional[Operation]:
    if operation_id is None:
        return None
    return get_operation_for_user(operation_id=operation_id, user=user)


# =============================================================================
# Expenses
# =============================================================================

def list_expenses(
    *,
    user: User,
    scope: Optional[str] = None,
    expense_type: Optional[str] = None,
    operation_id: Optional[UUID] = None,
    general: Optional[bool] = None,
) -> QuerySet[Expense]:
    queryset = Expense.objects.owned_by(user).select_related('operation')

    if scope:
        queryset = queryset.filter(scope=scope)
    if expense_type:
        queryset = queryset.filter(expense_type=expense_type)
    if operation_id:
        queryset = queryset.filter(operation_id=operation_id)
    if general:
        queryset = queryset.filter(operation__isnull=True)

    return queryset


def get_expense(*, expense_id, user: User) -> Expense:
    try:
        return Expense.objects.owned_by(user).get(id=expense_id)
    except (Expense.DoesNotExist, ValueError, ValidationError):
        raise ExpenseNotFoundError()


def create_expense(
    *,
    user: User,
    amount: Decimal,
    scope: str = Scope.BUSINESS,
    expense_type: str = 'OTHER',
    description: str = "",
    expense_date=None,
    operation_id: Optional[UUID] = None,
) -> Expense:
    """
    Record an expense, optionally against an accessible operation.

    Raises:
        OperationNotFoundError: If the operation is not visible to the user
    """
    operation = _resolve_operation(operation_id, user)

    return Expense.objects.create(
        user=user,
        operation=operation,
        amount=amount,
        scope=scope,
        expense_type=expense_type,
        description=description,
        expense_date=expense_date or timezone.now(),
    )


def update_expense(*, expense_id, user: User, **fields) -> Expense:
    """
    Update an owned expense.

    Passing ``operation_id=None`` detaches the expense from its operation.

    Raises:
        ExpenseNotFoundError: If the expense is not owned by the user
        OperationNotFoundError: If the new operation is not visible
    """
    if 'operation_id' in fields:
        fields['operation'] = _resolve_operation(fields.pop('operation_id'), user)

    changes = {k: v for k, v in fields.items() if k in EXPENSE_MUTABLE_FIELDS}

    try:
        updated = (
            Expense.objects
            .owned_by(user)
            .filter(id=expense_id)
            .update(**changes, updated_at=timezone.now())
        )
    except ValidationError:
        raise ExpenseNotFoundError()
    if updated == 0:
        raise ExpenseNotFoundError()

    return get_expense(expense_id=expense_id, user=user)


def delete_expense(*, expense_id, user: User) -> None:
    try:
        deleted, _ = Expense.objects.owned_by(user).filter(id=expense_id).delete()
    except ValidationError:
        raise ExpenseNotFoundError()
    if deleted == 0:
        raise ExpenseNotFoundError()


# =============================================================================
# Incomes
# =============================================================================

def list_incomes(*, user: User, scope: Optional[str] = None) -> QuerySet[Income]:
    queryset = Income.objects.owned_by(user)
    if scope:
        queryset = queryset.filter(scope=scope)
    return queryset


def get_income(*, income_id, user: User) -> Income:
    try:
        return Income.objects.owned_by(user).get(id=income_id)
    except (Income.DoesNotExist, ValueError, ValidationError):
        raise IncomeNotFoundError()


def create_income(
    *,
    user: User,
    amount: Decimal,
    scope: str = Scope.PERSONAL,
    description: str = "",
    income_date=None,
) -> Income:
    return Income.objects.create(
        user=user,
        amount=amount,
        scope=scope,
        description=description,
        income_date=income_date or timezone.now(),
    )


def update_income(*, income_id, user: User, **fields) -> Income:
    changes = {k: v for k, v in fields.items() if k in INCOME_MUTABLE_FIELDS}

    try:
        updated = (
            Income.objects
            .owned_by(user)
            .filter(id=income_id)
            .update(**changes, updated_at=timezone.now())
        )
    except ValidationError:
        raise IncomeNotFoundError()
    if updated == 0:
        raise IncomeNotFoundError()

    return get_income(income_id=income_id, user=user)


def delete_income(*, income_id, user: User) -> None:
    try:
        deleted, _ = Income.objects.owned_by(user).filter(id=income_id).delete()
    except ValidationError:
        raise IncomeNotFoundError()
    if deleted == 0:
        raise IncomeNotFoundError()


# =============================================================================
# Summary
# =============================================================================

def _totals_by_scope(queryset: QuerySet) -> dict:
    totals = {scope: Decimal('0') for scope in Scope.values}
    for row in queryset.values('scope').annotate(total=Sum('amount')):
        totals[row['scope']] = row['total'] or Decimal('0')
    return totals


def get_finance_summary(*, user: User) -> dict:
    """
    Totals of the user's expenses and incomes per scope.

    Returns:
        dict with ``expenses``, ``incomes`` (each ``{BUSINESS, PERSONAL,
        total}``) and ``net`` (incomes minus expenses)
    """
    expenses = _totals_by_scope(Expense.objects.owned_by(user))
    incomes = _totals_by_scope(Income.objects.owned_by(user))

    expenses['total'] = sum(expenses.values(), Decimal('0'))
    incomes['total'] = sum(incomes.values(), Decimal('0'))

    return {
        'expenses': expenses,
        'incomes': incomes,
        'net': incomes['total'] - expenses['total'],
    }
