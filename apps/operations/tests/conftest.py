import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.directory.models import Provider, Product
from apps.operations.models import Operation
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return the operation owner."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        name='Buyer',
    )


@pytest.fixture
def other_user(db):
    """Create and return an unrelated user."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other',
    )


@pytest.fixture
def provider(user):
    return Provider.objects.create(user=user, name='Finca El Roble', phone='555-0101')


@pytest.fixture
def product(user):
    return Product.objects.create(user=user, name='Cacao seco', unit='kg')


@pytest.fixture
def operation(user, provider, product):
    """OPEN operation: 100 kg at 10.00 per kg."""
    return Operation.objects.create(
        operation_number='20250101-AB12',
        user=user,
        provider=provider,
        product=product,
        price_per_unit=Decimal('10.00'),
        agreed_quantity=Decimal('100'),
    )


@pytest.fixture
def shared_operation(operation, user, other_user):
    """The operation shared with an organization both users belong to."""
    org = Organization.objects.create(name='Acopio Sur', created_by=user)
    OrganizationMember.objects.create(user=user, organization=org, role=OrganizationRole.ADMIN)
    OrganizationMember.objects.create(user=other_user, organization=org, role=OrganizationRole.OPERATOR)
    operation.organization = org
    operation.save()
    return operation


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as the owner."""
    return _client_for(user)


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as the unrelated user."""
    return _client_for(other_user)
