import pytest
from decimal import Decimal

from apps.analytics.services import get_dashboard
from apps.finance.models import Expense, Income
from apps.organizations.services import OrganizationNotFoundError


@pytest.mark.django_db
class TestDashboard:

    def test_counts(self, user, portfolio):
        summary = get_dashboard(user=user)['summary']

        assert summary['total_operations'] == 2
        assert summary['open_operations'] == 1
        assert summary['closed_operations'] == 1
        assert summary['total_providers'] == 2

    def test_financial_totals_follow_balance_signs(self, user, portfolio):
        financial = get_dashboard(user=user)['financial']

        # 1000 + 600 agreed; 350 + (600 - 20) paid in
        assert financial['total_amount'] == Decimal('1600')
        assert financial['total_advances'] == Decimal('930')
        assert financial['pending_balance'] == Decimal('670')
        assert financial['average_price'] == Decimal('10.67')

    def test_volume(self, user, portfolio):
        volume = get_dashboard(user=user)['volume']

        assert volume['total_volume'] == Decimal('150')
        assert volume['total_delivered'] == Decimal('110')
        assert volume['pending_volume'] == Decimal('40')

    def test_top_providers_by_volume(self, user, portfolio):
        top = get_dashboard(user=user)['top_providers']

        assert [p['name'] for p in top] == ['Finca El Roble', 'Finca La Palma']
        assert top[0]['operation_count'] == 1

    def test_expense_and_income_totals(self, user, portfolio):
        Expense.objects.create(user=user, amount=Decimal('30.00'))
        Income.objects.create(user=user, amount=Decimal('80.00'))

        summary = get_dashboard(user=user)['summary']

        assert summary['total_expenses'] == Decimal('30.00')
        assert summary['total_incomes'] == Decimal('80.00')

    def test_organization_scope(self, user, organization):
        dashboard = get_dashboard(user=user, organization_id=organization.id)

        assert dashboard['summary']['total_operations'] == 1
        assert dashboard['financial']['total_amount'] == Decimal('1000')

    def test_organization_requires_membership(self, outsider, organization):
        with pytest.raises(OrganizationNotFoundError):
            get_dashboard(user=outsider, organization_id=organization.id)

    def test_empty(self, outsider):
        dashboard = get_dashboard(user=outsider)

        assert dashboard['financial']['average_price'] == Decimal('0')
        assert dashboard['top_providers'] == []
