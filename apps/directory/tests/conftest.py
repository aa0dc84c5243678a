import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.directory.models import Provider, Client, Product
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        name='Buyer',
    )


@pytest.fixture
def colleague(db):
    """Create and return a second user."""
    return User.objects.create_user(
        email='colleague@example.com',
        password='TestPass123!',
        name='Colleague',
    )


@pytest.fixture
def organization(user, colleague):
    """Organization shared by ``user`` (ADMIN) and ``colleague`` (OPERATOR)."""
    org = Organization.objects.create(name='Acopio Centro', created_by=user)
    OrganizationMember.objects.create(user=user, organization=org, role=OrganizationRole.ADMIN)
    OrganizationMember.objects.create(user=colleague, organization=org, role=OrganizationRole.OPERATOR)
    return org


@pytest.fixture
def provider(user):
    return Provider.objects.create(user=user, name='Finca La Esperanza', phone='555-0199')


@pytest.fixture
def shared_provider(user, organization):
    return Provider.objects.create(user=user, organization=organization, name='Cooperativa Los Andes')


@pytest.fixture
def client_record(user):
    return Client.objects.create(user=user, name='Exportadora Pacífico')


@pytest.fixture
def product(user):
    return Product.objects.create(user=user, name='Café pergamino', unit='qq')


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as ``user``."""
    return _client_for(user)


@pytest.fixture
def colleague_client(colleague):
    """Return API client authenticated as ``colleague``."""
    return _client_for(colleague)
