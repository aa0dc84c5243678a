import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.directory.models import Provider, Product
from apps.operations.models import Operation, OperationStatus
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='analyst@example.com',
        password='TestPass123!',
        name='Analyst',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        name='Outsider',
    )


@pytest.fixture
def portfolio(user):
    """Two providers; one open and one closed operation with movements."""
    roble = Provider.objects.create(user=user, name='Finca El Roble')
    palma = Provider.objects.create(user=user, name='Finca La Palma')
    product = Product.objects.create(user=user, name='Cacao')

    first = Operation.objects.create(
        operation_number='20250701-A001',
        user=user,
        provider=roble,
        product=product,
        price_per_unit=Decimal('10.00'),
        agreed_quantity=Decimal('100'),
    )
    first.money_movements.create(amount=Decimal('200'), movement_type='ADVANCE')
    first.money_movements.create(amount=Decimal('150'), movement_type='ADVANCE')
    first.product_movements.create(net_weight=Decimal('40'), movement_type='DELIVERY')
    first.product_movements.create(net_weight=Decimal('20'), movement_type='DELIVERY')

    second = Operation.objects.create(
        operation_number='20250701-A002',
        user=user,
        provider=palma,
        product=product,
        price_per_unit=Decimal('12.00'),
        agreed_quantity=Decimal('50'),
        status=OperationStatus.CLOSED,
    )
    second.money_movements.create(amount=Decimal('600'), movement_type='PAYMENT')
    second.money_movements.create(amount=Decimal('20'), movement_type='ADJUSTMENT')
    second.product_movements.create(net_weight=Decimal('50'), movement_type='DELIVERY')

    return {'roble': roble, 'palma': palma, 'operations': [first, second]}


@pytest.fixture
def organization(user, portfolio):
    """Organization holding only the first operation."""
    org = Organization.objects.create(name='Acopio Este', created_by=user)
    OrganizationMember.objects.create(user=user, organization=org, role=OrganizationRole.ADMIN)
    first = portfolio['operations'][0]
    first.organization = org
    first.save()
    return org


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
