import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.directory.models import Provider, Product
from apps.finance.models import Expense, ExpenseType, Income, Scope
from apps.operations.models import Operation


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        name='Buyer',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other',
    )


@pytest.fixture
def operation(user):
    provider = Provider.objects.create(user=user, name='Finca Las Palmas')
    product = Product.objects.create(user=user, name='Cacao')
    return Operation.objects.create(
        operation_number='20250401-F001',
        user=user,
        provider=provider,
        product=product,
        price_per_unit=Decimal('8.00'),
        agreed_quantity=Decimal('50'),
    )


@pytest.fixture
def freight_expense(user, operation):
    return Expense.objects.create(
        user=user,
        operation=operation,
        amount=Decimal('45.00'),
        scope=Scope.BUSINESS,
        expense_type=ExpenseType.FREIGHT,
    )


@pytest.fixture
def food_expense(user):
    return Expense.objects.create(
        user=user,
        amount=Decimal('12.50'),
        scope=Scope.PERSONAL,
        expense_type=ExpenseType.FOOD,
    )


@pytest.fixture
def income(user):
    return Income.objects.create(user=user, amount=Decimal('300.00'), scope=Scope.BUSINESS)


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
