import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.directory.models import Client, Product
from apps.sales.models import Sale


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        name='Seller',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other',
    )


@pytest.fixture
def client_record(user):
    return Client.objects.create(user=user, name='Chocolates del Valle')


@pytest.fixture
def product(user):
    return Product.objects.create(user=user, name='Cacao fermentado')


@pytest.fixture
def sale(user, client_record, product):
    """PENDING sale worth 500.00."""
    return Sale.objects.create(
        sale_number='V-20250501-0001',
        user=user,
        client=client_record,
        product=product,
        quantity=Decimal('50'),
        price_per_unit=Decimal('10.00'),
        total_amount=Decimal('500.00'),
    )


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
