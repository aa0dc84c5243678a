import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.operations.models import Operation, OperationStatus


@pytest.mark.django_db
class TestOperationAPI:
    """Tests for operation endpoints."""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('operations:operation-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_operation(self, authenticated_client, provider, product):
        response = authenticated_client.post(
            reverse('operations:operation-list'),
            {
                'provider_id': str(provider.id),
                'product_id': str(product.id),
                'price_per_unit': '10.00',
                'agreed_quantity': '100',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == OperationStatus.OPEN
        assert Operation.objects.filter(id=response.data['id']).exists()

    def test_list_filters_by_status(self, authenticated_client, operation):
        response = authenticated_client.get(reverse('operations:operation-list'), {'status': 'CLOSED'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0

    def test_list_rejects_unknown_status(self, authenticated_client, operation):
        response = authenticated_client.get(reverse('operations:operation-list'), {'status': 'PENDING'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_detail_includes_balance(self, authenticated_client, operation, user):
        operation.money_movements.create(amount=Decimal('200'), movement_type='ADVANCE')
        operation.product_movements.create(net_weight=Decimal('40'), movement_type='DELIVERY')

        response = authenticated_client.get(reverse('operations:operation-detail', args=[operation.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['operation']['operation_number'] == operation.operation_number
        assert response.data['balance']['money_balance'] == '800.00'
        assert response.data['balance']['product_progress'] == '40.00'

    def test_detail_of_heavily_overpaid_operation(self, authenticated_client, operation):
        operation.money_movements.create(amount=Decimal('1000000'), movement_type='PAYMENT')

        response = authenticated_client.get(reverse('operations:operation-detail', args=[operation.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance']['money_balance'] == '-999000.00'
        assert response.data['balance']['money_progress'] == '100000.00'

    def test_balance_of_tiny_agreed_quantity(self, authenticated_client, operation):
        Operation.objects.filter(id=operation.id).update(agreed_quantity=Decimal('0.001'))
        operation.product_movements.create(net_weight=Decimal('5'), movement_type='DELIVERY')

        response = authenticated_client.get(reverse('operations:operation-balance', args=[operation.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['product_progress'] == '500000.00'

    def test_outsider_gets_not_found(self, other_client, operation):
        response = other_client.get(reverse('operations:operation-detail', args=[operation.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_record_money_movement(self, authenticated_client, operation):
        response = authenticated_client.post(
            reverse('operations:operation-money-movements', args=[operation.id]),
            {'amount': '150.00', 'movement_type': 'ADVANCE', 'payment_method': 'TRANSFER'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert operation.money_movements.count() == 1

    def test_record_product_movement_rejects_zero(self, authenticated_client, operation):
        response = authenticated_client.post(
            reverse('operations:operation-product-movements', args=[operation.id]),
            {'net_weight': '0', 'movement_type': 'DELIVERY'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_close_then_movement_conflicts(self, authenticated_client, operation):
        close_url = reverse('operations:operation-close', args=[operation.id])
        response = authenticated_client.post(close_url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['operation']['status'] == OperationStatus.CLOSED

        response = authenticated_client.post(
            reverse('operations:operation-money-movements', args=[operation.id]),
            {'amount': '10.00', 'movement_type': 'PAYMENT'},
            format='json',
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'operation_closed'

        response = authenticated_client.post(close_url)
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_partial_update(self, authenticated_client, operation):
        response = authenticated_client.patch(
            reverse('operations:operation-detail', args=[operation.id]),
            {'description': 'Second harvest'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['description'] == 'Second harvest'

    def test_delete(self, authenticated_client, operation):
        response = authenticated_client.delete(reverse('operations:operation-detail', args=[operation.id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Operation.objects.filter(id=operation.id).exists()
