import uuid
import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.directory.models import Provider, Product
from apps.operations.models import Operation, OperationStatus


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='field@example.com',
        password='TestPass123!',
        name='Field Buyer',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other',
    )


@pytest.fixture
def past():
    """A client timestamp one hour ago."""
    return timezone.now() - timedelta(hours=1)


@pytest.fixture
def provider(user):
    return Provider.objects.create(user=user, name='Finca Vieja')


@pytest.fixture
def product(user):
    return Product.objects.create(user=user, name='Cacao')


@pytest.fixture
def operation(user, provider, product):
    return Operation.objects.create(
        operation_number='20250601-S001',
        user=user,
        provider=provider,
        product=product,
        price_per_unit=Decimal('10.00'),
        agreed_quantity=Decimal('100'),
    )


@pytest.fixture
def closed_operation(operation):
    Operation.objects.filter(id=operation.id).update(
        status=OperationStatus.CLOSED,
        closed_at=timezone.now(),
    )
    operation.refresh_from_db()
    return operation


@pytest.fixture
def new_id():
    return lambda: str(uuid.uuid4())


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()
