"""
Dashboard aggregation.

Figures are folded from per-operation balances so that the dashboard and
the operation detail view always agree on sign conventions. Without an
organization the dashboard covers the caller's own operations; with one,
every operation shared with that organization.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from django.db.models import Sum

from apps.accounts.models import User
from apps.directory.models import Provider
from apps.finance.models import Expense, Income
from apps.operations.models import Operation, OperationStatus
from apps.operations.services import compute_balance
from apps.organizations.services import get_organization


ZERO = Decimal('0')
CENTS = Decimal('0.01')
TOP_PROVIDERS = 5


def _sum(queryset) -> Decimal:
    return queryset.aggregate(total=Sum('amount'))['total'] or ZERO


def get_dashboard(*, user: User, organization_id: Optional[UUID] = None) -> dict:
    """
    Build dashboard metrics.

    Raises:
        OrganizationNotFoundError: If the user is not a member of the organization
    """
    if organization_id:
        organization = get_organization(organization_id=organization_id, user=user)
        operations = Operation.objects.filter(organization=organization)
        providers = Provider.objects.filter(organization=organization)
        expenses = Expense.objects.filter(user=user, operation__organization=organization)
    else:
        operations = Operation.objects.filter(user=user)
        providers = Provider.objects.filter(user=user)
        expenses = Expense.objects.filter(user=user)

    operations = operations.select_related('provider').prefetch_related('money_movements', 'product_movements')

    counts = {OperationStatus.OPEN: 0, OperationStatus.CLOSED: 0}
    total_amount = total_advances = total_volume = total_delivered = ZERO
    by_provider = {}

    for operation in operations:
        balance = compute_balance(operation, operation.money_movements.all(), operation.product_movements.all())
        counts[operation.status] += 1

        total_amount += balance.total_agreed_money
        total_advances += balance.total_advances
        total_volume += balance.agreed_quantity
        total_delivered += balance.total_delivered

        stats = by_provider.setdefault(operation.provider_id, {
            'id': operation.provider_id,
            'name': operation.provider.name,
            'operation_count': 0,
            'total_volume': ZERO,
            'total_amount': ZERO,
        })
        stats['operation_count'] += 1
        stats['total_volume'] += balance.agreed_quantity
        stats['total_amount'] += balance.total_agreed_money

    average_price = ZERO
    if total_volume > 0:
        average_price = (total_amount / total_volume).quantize(CENTS, rounding=ROUND_HALF_UP)

    top_providers = sorted(by_provider.values(), key=lambda s: s['total_volume'], reverse=True)

    return {
        'summary': {
            'total_operations': counts[OperationStatus.OPEN] + counts[OperationStatus.CLOSED],
            'open_operations': counts[OperationStatus.OPEN],
            'closed_operations': counts[OperationStatus.CLOSED],
            'total_providers': providers.count(),
            'total_expenses': _sum(expenses),
            'total_incomes': _sum(Income.objects.filter(user=user)),
        },
        'financial': {
            'total_amount': total_amount,
            'total_advances': total_advances,
            'pending_balance': total_amount - total_advances,
            'average_price': average_price,
        },
        'volume': {
            'total_volume': total_volume,
            'total_delivered': total_delivered,
            'pending_volume': total_volume - total_delivered,
        },
        'top_providers': top_providers[:TOP_PROVIDERS],
    }
