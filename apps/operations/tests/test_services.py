import pytest
from decimal import Decimal
from datetime import timedelta
from unittest import mock

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.directory.services import ProviderNotFoundError
from apps.operations.models import Operation, OperationStatus
from apps.operations.services import (
    create_operation,
    get_operation_for_user,
    add_money_movement,
    add_product_movement,
    update_operation,
    close_operation,
    delete_operation,
    resolve_net_weight,
    OperationNotFoundError,
    OperationClosedError,
    OperationAlreadyClosedError,
    OperationNumberConflictError,
    InvalidMovementError,
)


@pytest.mark.django_db
class TestCreateOperation:

    def test_create_operation(self, user, provider, product):
        operation = create_operation(
            user=user,
            provider_id=provider.id,
            product_id=product.id,
            price_per_unit=Decimal('12.50'),
            agreed_quantity=Decimal('80'),
        )

        assert operation.status == OperationStatus.OPEN
        assert len(operation.operation_number) == 13
        assert operation.operation_number[8] == '-'

    def test_provider_must_be_visible(self, other_user, provider, product):
        with pytest.raises(ProviderNotFoundError):
            create_operation(
                user=other_user,
                provider_id=provider.id,
                product_id=product.id,
                price_per_unit=Decimal('1'),
            )

    def test_number_collision_is_retried(self, user, provider, product, operation):
        numbers = iter([operation.operation_number, '20250101-ZZ99'])

        with mock.patch(
            'apps.operations.services.lifecycle.generate_document_number',
            side_effect=lambda: next(numbers),
        ):
            created = create_operation(
                user=user,
                provider_id=provider.id,
                product_id=product.id,
                price_per_unit=Decimal('1'),
            )

        assert created.operation_number == '20250101-ZZ99'

    def test_number_collision_exhausts_retries(self, user, provider, product, operation):
        with mock.patch(
            'apps.operations.services.lifecycle.generate_document_number',
            return_value=operation.operation_number,
        ):
            with pytest.raises(OperationNumberConflictError):
                create_operation(
                    user=user,
                    provider_id=provider.id,
                    product_id=product.id,
                    price_per_unit=Decimal('1'),
                    max_retries=2,
                )

    def test_other_integrity_errors_propagate(self, user, provider, product):
        with mock.patch.object(Operation.objects, 'create', side_effect=IntegrityError('boom')):
            with pytest.raises(IntegrityError):
                create_operation(
                    user=user,
                    provider_id=provider.id,
                    product_id=product.id,
                    price_per_unit=Decimal('1'),
                )


@pytest.mark.django_db
class TestAccess:

    def test_outsider_cannot_see_operation(self, operation, other_user):
        with pytest.raises(OperationNotFoundError):
            get_operation_for_user(operation_id=operation.id, user=other_user)

    def test_organization_member_can_see_shared_operation(self, shared_operation, other_user):
        found = get_operation_for_user(operation_id=shared_operation.id, user=other_user)
        assert found.id == shared_operation.id

    def test_invalid_id_is_not_found(self, user):
        with pytest.raises(OperationNotFoundError):
            get_operation_for_user(operation_id='not-a-uuid', user=user)


@pytest.mark.django_db
class TestMovements:

    def test_add_money_movement_updates_balance(self, operation, user):
        add_money_movement(operation_id=operation.id, user=user, amount=Decimal('200'), movement_type='ADVANCE')
        add_money_movement(operation_id=operation.id, user=user, amount=Decimal('150'), movement_type='ADVANCE')

        balance = Operation.objects.get(id=operation.id).get_balance()
        assert balance.money_balance == Decimal('650')

    def test_movement_touches_parent(self, operation, user):
        before = timezone.now() - timedelta(days=1)
        Operation.objects.filter(id=operation.id).update(updated_at=before)

        add_money_movement(operation_id=operation.id, user=user, amount=Decimal('1'), movement_type='PAYMENT')

        assert Operation.objects.get(id=operation.id).updated_at > before

    def test_non_positive_amount_rejected(self, operation, user):
        with pytest.raises(InvalidMovementError):
            add_money_movement(operation_id=operation.id, user=user, amount=Decimal('0'), movement_type='ADVANCE')

    def test_database_rejects_non_positive_amounts(self, operation):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                operation.money_movements.create(amount=Decimal('0'), movement_type='ADVANCE')
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                operation.product_movements.create(net_weight=Decimal('0'), movement_type='DELIVERY')

    def test_closed_operation_rejects_movements(self, operation, user):
        close_operation(operation_id=operation.id, user=user)

        with pytest.raises(OperationClosedError):
            add_money_movement(operation_id=operation.id, user=user, amount=Decimal('5'), movement_type='ADVANCE')
        with pytest.raises(OperationClosedError):
            add_product_movement(operation_id=operation.id, user=user, net_weight=Decimal('5'), movement_type='DELIVERY')

        assert operation.money_movements.count() == 0
        assert operation.product_movements.count() == 0

    def test_outsider_cannot_add_movement(self, operation, other_user):
        with pytest.raises(OperationNotFoundError):
            add_money_movement(
                operation_id=operation.id, user=other_user, amount=Decimal('5'), movement_type='ADVANCE',
            )

    def test_product_movement_derives_net_weight(self, operation, user):
        movement = add_product_movement(
            operation_id=operation.id,
            user=user,
            movement_type='DELIVERY',
            gross_weight=Decimal('52.5'),
            tare=Decimal('2.5'),
        )

        assert movement.net_weight == Decimal('50')


class TestResolveNetWeight:

    def test_net_only(self):
        assert resolve_net_weight(Decimal('10')) == Decimal('10')

    def test_inconsistent_weights_rejected(self):
        with pytest.raises(InvalidMovementError):
            resolve_net_weight(Decimal('10'), Decimal('15'), Decimal('2'))

    def test_missing_weights_rejected(self):
        with pytest.raises(InvalidMovementError):
            resolve_net_weight(None, Decimal('15'))

    def test_non_positive_rejected(self):
        with pytest.raises(InvalidMovementError):
            resolve_net_weight(None, Decimal('2'), Decimal('2'))


@pytest.mark.django_db
class TestLifecycle:

    def test_close_sets_closed_at(self, operation, user):
        closed = close_operation(operation_id=operation.id, user=user)

        assert closed.status == OperationStatus.CLOSED
        assert closed.closed_at is not None

    def test_close_twice_rejected(self, operation, user):
        close_operation(operation_id=operation.id, user=user)

        with pytest.raises(OperationAlreadyClosedError):
            close_operation(operation_id=operation.id, user=user)

    def test_close_logs(self, operation, user, caplog):
        with caplog.at_level('INFO', logger='apps.operations'):
            close_operation(operation_id=operation.id, user=user)

        assert any('closed' in record.getMessage() for record in caplog.records)

    def test_update_open_operation(self, operation, user):
        updated = update_operation(
            operation_id=operation.id,
            user=user,
            total_amount=Decimal('950'),
            status='CLOSED',
        )

        assert updated.total_amount == Decimal('950')
        assert updated.status == OperationStatus.OPEN

    def test_update_closed_operation_rejected(self, operation, user):
        close_operation(operation_id=operation.id, user=user)

        with pytest.raises(OperationClosedError):
            update_operation(operation_id=operation.id, user=user, description='late edit')

    def test_member_can_close_shared_operation(self, shared_operation, other_user):
        closed = close_operation(operation_id=shared_operation.id, user=other_user)
        assert closed.status == OperationStatus.CLOSED

    def test_delete_owner_only(self, shared_operation, other_user, user):
        with pytest.raises(OperationNotFoundError):
            delete_operation(operation_id=shared_operation.id, user=other_user)

        delete_operation(operation_id=shared_operation.id, user=user)
        assert not Operation.objects.filter(id=shared_operation.id).exists()
