import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.organizations.models import Organization, OrganizationMember, OrganizationRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def org_admin(db):
    """Create and return the organization's admin."""
    return User.objects.create_user(
        email='orgadmin@example.com',
        password='TestPass123!',
        name='Org Admin',
    )


@pytest.fixture
def operator_user(db):
    """Create and return an OPERATOR member."""
    return User.objects.create_user(
        email='operator@example.com',
        password='TestPass123!',
        name='Operator',
    )


@pytest.fixture
def outsider(db):
    """Create and return a user not in any organization."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        name='Outsider',
    )


@pytest.fixture
def organization(db, org_admin, operator_user):
    """Organization with one ADMIN and one OPERATOR."""
    org = Organization.objects.create(
        name='Acopio Norte',
        description='Main collection center',
        created_by=org_admin,
    )
    OrganizationMember.objects.create(user=org_admin, organization=org, role=OrganizationRole.ADMIN)
    OrganizationMember.objects.create(user=operator_user, organization=org, role=OrganizationRole.OPERATOR)
    return org


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_client(org_admin):
    """Return API client authenticated as organization admin."""
    return _client_for(org_admin)


@pytest.fixture
def operator_client(operator_user):
    """Return API client authenticated as an operator member."""
    return _client_for(operator_user)


@pytest.fixture
def outsider_client(outsider):
    """Return API client authenticated as a non-member."""
    return _client_for(outsider)
