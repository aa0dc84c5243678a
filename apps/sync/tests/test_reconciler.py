import pytest
from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.db import DataError, OperationalError
from django.utils import timezone

from apps.directory.models import Provider
from apps.operations.models import MoneyMovement, Operation, OperationStatus
from apps.sync.models import SyncLog, SyncStatus, SyncType
from apps.sync.services import SyncUnavailableError, push, pull
from apps.sync.services.handlers import ProviderHandler


def _stamp(moment):
    return moment.isoformat()


def _empty(result):
    return {'created': 0, 'updated': 0, 'skipped': 0, 'errors': []} == result


@pytest.mark.django_db
class TestPush:

    def test_new_provider_is_created_and_logged(self, user, new_id, past):
        record_id = new_id()

        results = push(user=user, batch={
            'providers': [{'id': record_id, 'name': 'Finca Nueva', 'updated_at': _stamp(past)}],
        })

        assert results['providers'] == {'created': 1, 'updated': 0, 'skipped': 0, 'errors': []}
        assert all(_empty(results[name]) for name in results if name != 'providers')

        log = SyncLog.objects.get(user=user)
        assert log.sync_type == SyncType.PUSH
        assert log.status == SyncStatus.SUCCESS
        assert log.records_count == 1

    def test_client_timestamps_are_kept(self, user, new_id, past):
        record_id = new_id()
        created = past - timedelta(days=2)

        push(user=user, batch={'clients': [{
            'id': record_id,
            'name': 'Comprador',
            'created_at': _stamp(created),
            'updated_at': _stamp(past),
        }]})

        client = user.clients.get(id=record_id)
        assert client.created_at == created
        assert client.updated_at == past

    def test_same_batch_twice_is_idempotent(self, user, new_id, past):
        provider_id, product_id, operation_id = new_id(), new_id(), new_id()
        batch = {
            'providers': [{'id': provider_id, 'name': 'Finca', 'updated_at': _stamp(past)}],
            'products': [{'id': product_id, 'name': 'Maíz', 'updated_at': _stamp(past)}],
            'operations': [{
                'id': operation_id,
                'operation_number': '20250601-C001',
                'provider_id': provider_id,
                'product_id': product_id,
                'price_per_unit': '4.00',
                'agreed_quantity': '20',
                'updated_at': _stamp(past),
            }],
            'money_movements': [{
                'id': new_id(),
                'operation_id': operation_id,
                'amount': '30.00',
                'movement_type': 'ADVANCE',
                'updated_at': _stamp(past),
            }],
        }

        first = push(user=user, batch=batch)
        second = push(user=user, batch=batch)

        assert sum(r['created'] for r in first.values()) == 4
        for result in second.values():
            assert result['created'] == 0
            assert result['updated'] == 0
            assert result['errors'] == []
        assert MoneyMovement.objects.filter(operation_id=operation_id).count() == 1

    def test_older_record_never_mutates(self, user, provider):
        stale = provider.updated_at - timedelta(minutes=5)

        results = push(user=user, batch={'providers': [{
            'id': str(provider.id), 'name': 'Stale Name', 'updated_at': _stamp(stale),
        }]})

        provider.refresh_from_db()
        assert results['providers']['skipped'] == 1
        assert provider.name == 'Finca Vieja'

    def test_newer_record_wins(self, user, provider):
        fresh = timezone.now() + timedelta(minutes=5)

        results = push(user=user, batch={'providers': [{
            'id': str(provider.id), 'name': 'Finca Renovada', 'updated_at': _stamp(fresh),
        }]})

        provider.refresh_from_db()
        assert results['providers']['updated'] == 1
        assert provider.name == 'Finca Renovada'
        assert provider.updated_at == fresh

    def test_invalid_record_does_not_block_valid_one(self, user, new_id, past):
        bad_id, good_id = new_id(), new_id()

        results = push(user=user, batch={'providers': [
            {'id': bad_id, 'updated_at': _stamp(past)},
            {'id': good_id, 'name': 'Finca Buena', 'updated_at': _stamp(past)},
        ]})

        assert results['providers']['created'] == 1
        assert [e['id'] for e in results['providers']['errors']] == [bad_id]
        assert results['providers']['errors'][0]['code'] == 'invalid'
        assert Provider.objects.filter(id=good_id).exists()

    def test_movement_for_closed_operation_is_rejected(self, user, closed_operation, new_id, past):
        movement_id = new_id()

        results = push(user=user, batch={'money_movements': [{
            'id': movement_id,
            'operation_id': str(closed_operation.id),
            'amount': '10.00',
            'movement_type': 'PAYMENT',
            'updated_at': _stamp(past),
        }]})

        errors = results['money_movements']['errors']
        assert errors == [{'id': movement_id, 'error': mock.ANY, 'code': 'operation_closed'}]
        assert not MoneyMovement.objects.filter(id=movement_id).exists()

    def test_movement_touches_parent(self, user, operation, new_id, past):
        Operation.objects.filter(id=operation.id).update(updated_at=past - timedelta(days=1))

        push(user=user, batch={'product_movements': [{
            'id': new_id(),
            'operation_id': str(operation.id),
            'gross_weight': '12.000',
            'tare': '2.000',
            'movement_type': 'DELIVERY',
            'updated_at': _stamp(past),
        }]})

        operation.refresh_from_db()
        assert operation.updated_at >= past
        assert operation.product_movements.get().net_weight == Decimal('10')

    def test_closed_server_operation_is_not_updated(self, user, closed_operation):
        results = push(user=user, batch={'operations': [{
            'id': str(closed_operation.id),
            'status': 'OPEN',
            'provider_id': str(closed_operation.provider_id),
            'product_id': str(closed_operation.product_id),
            'price_per_unit': '99.00',
            'updated_at': _stamp(timezone.now() + timedelta(minutes=1)),
        }]})

        closed_operation.refresh_from_db()
        assert results['operations']['errors'][0]['code'] == 'operation_closed'
        assert closed_operation.status == OperationStatus.CLOSED
        assert closed_operation.price_per_unit == Decimal('10.00')

    def test_client_can_close_open_operation(self, user, operation):
        closed_at = timezone.now() + timedelta(minutes=1)

        results = push(user=user, batch={'operations': [{
            'id': str(operation.id),
            'status': 'CLOSED',
            'provider_id': str(operation.provider_id),
            'product_id': str(operation.product_id),
            'price_per_unit': '10.00',
            'closed_at': _stamp(closed_at),
            'updated_at': _stamp(closed_at),
        }]})

        operation.refresh_from_db()
        assert results['operations']['updated'] == 1
        assert operation.status == OperationStatus.CLOSED
        assert operation.closed_at == closed_at

    def test_identifier_owned_by_someone_else(self, other_user, provider, past):
        results = push(user=other_user, batch={'providers': [{
            'id': str(provider.id), 'name': 'Takeover', 'updated_at': _stamp(past),
        }]})

        assert results['providers']['errors'][0]['code'] == 'id_in_use'
        provider.refresh_from_db()
        assert provider.name == 'Finca Vieja'

    def test_unresolvable_reference(self, other_user, new_id, product, past):
        results = push(user=other_user, batch={'operations': [{
            'id': new_id(),
            'provider_id': new_id(),
            'product_id': str(product.id),
            'price_per_unit': '1.00',
            'updated_at': _stamp(past),
        }]})

        assert results['operations']['errors'][0]['code'] == 'not_found'

    def test_storage_failure_aborts_and_logs(self, user, new_id, past):
        with mock.patch.object(ProviderHandler, 'apply', side_effect=OperationalError('database is locked')):
            with pytest.raises(SyncUnavailableError):
                push(user=user, batch={'providers': [
                    {'id': new_id(), 'name': 'Finca', 'updated_at': _stamp(past)},
                ]})

        log = SyncLog.objects.get(user=user)
        assert log.status == SyncStatus.FAILED
        assert log.records_count == 1
        assert 'database is locked' in log.error_message

    def test_data_error_aborts_and_logs(self, user, new_id, past):
        with mock.patch.object(ProviderHandler, 'apply', side_effect=DataError('value too long')):
            with pytest.raises(SyncUnavailableError):
                push(user=user, batch={'providers': [
                    {'id': new_id(), 'name': 'Finca', 'updated_at': _stamp(past)},
                ]})

        log = SyncLog.objects.get(user=user)
        assert log.status == SyncStatus.FAILED
        assert log.sync_type == SyncType.PUSH
        assert 'value too long' in log.error_message


@pytest.mark.django_db
class TestPull:

    def test_pull_without_since_returns_everything(self, user, operation, provider):
        operation.money_movements.create(amount=Decimal('50'), movement_type='ADVANCE')
        Operation.objects.filter(id=operation.id).update(updated_at=timezone.now() - timedelta(days=400))

        result = pull(user=user)

        assert result.operations == [operation]
        assert list(result.operations[0].money_movements.all())
        assert provider in result.providers
        assert SyncLog.objects.get(user=user).records_count == result.records_count

    def test_pull_after_everything_is_empty_but_logged(self, user, operation):
        result = pull(user=user, since=timezone.now() + timedelta(minutes=1))

        assert result.operations == []
        assert result.providers == []
        assert result.records_count == 0
        assert result.products  # reference data is always sent
        log = SyncLog.objects.get(user=user)
        assert log.sync_type == SyncType.PULL
        assert log.status == SyncStatus.SUCCESS

    def test_timestamp_taken_before_reads(self, user):
        before = timezone.now()
        result = pull(user=user)

        assert before <= result.sync_timestamp <= SyncLog.objects.get(user=user).created_at

    def test_operation_scoped_expense_change_resurfaces_operation(self, user, operation):
        since = timezone.now()
        Operation.objects.filter(id=operation.id).update(updated_at=since - timedelta(hours=1))
        operation.expenses.create(user=user, amount=Decimal('15.00'), expense_type='FREIGHT')

        result = pull(user=user, since=since)

        assert result.operations == [operation]
        assert result.expenses == []

    def test_other_users_data_is_not_pulled(self, other_user, operation):
        result = pull(user=other_user)

        assert result.operations == []
        assert result.products == []
