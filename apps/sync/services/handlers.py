"""
Per-collection rules for applying pushed records.

Each handler knows which rows the caller may see, how to build a new row
from a validated record (resolving foreign references within the caller's
visibility) and which fields a newer client copy may overwrite. The
reconciler drives them; handlers never catch errors themselves.
"""

import enum
from typing import Any

from django.db.models import Model, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.directory.models import Client, Product, Provider
from apps.directory.services import ProductNotFoundError, get_provider
from apps.finance.models import Expense, Income
from apps.operations.models import (
    MoneyMovement,
    Operation,
    OperationStatus,
    ProductMovement,
)
from apps.operations.services import (
    OperationClosedError,
    OperationNotFoundError,
    generate_document_number,
    get_operation_for_user,
    resolve_net_weight,
    touch_operation,
)
from apps.organizations.services import get_organization
from apps.sync import serializers as records

from .exceptions import RecordIdConflictError


class RecordOutcome(enum.Enum):
    CREATED = 'created'
    UPDATED = 'updated'
    SKIPPED = 'skipped'
    ERROR = 'error'


def _pick(data: dict, fields) -> dict:
    return {name: data[name] for name in fields if name in data}


class CollectionHandler:
    """Owner-scoped, last-write-wins collection."""

    model: type[Model]
    serializer_class: type
    fields: tuple = ()

    def visible(self, user: User) -> QuerySet:
        return self.model.objects.filter(user=user)

    def build(self, user: User, data: dict) -> dict:
        return {'user': user, **_pick(data, self.fields)}

    def changes(self, user: User, data: dict, existing: Model) -> dict:
        return _pick(data, self.fields)

    def apply(self, user: User, data: dict) -> RecordOutcome:
        existing = self.visible(user).filter(pk=data['id']).first()
        if existing is None:
            if self.model.objects.filter(pk=data['id']).exists():
                raise RecordIdConflictError()
            self.create(user, data)
            return RecordOutcome.CREATED
        return self.update(user, data, existing)

    def create(self, user: User, data: dict) -> Model:
        instance = self.model.objects.create(id=data['id'], **self.build(user, data))
        # auto_now fields ignore explicit values on save()
        self.model.objects.filter(pk=instance.pk).update(
            created_at=data['created_at'],
            updated_at=data['updated_at'],
        )
        return instance

    def guarded(self, user: User, data: dict, existing: Model) -> QuerySet:
        return self.visible(user).filter(pk=existing.pk, updated_at__lt=data['updated_at'])

    def update(self, user: User, data: dict, existing: Model) -> RecordOutcome:
        if data['updated_at'] <= existing.updated_at:
            return RecordOutcome.SKIPPED

        changes = self.changes(user, data, existing)
        updated = self.guarded(user, data, existing).update(**changes, updated_at=data['updated_at'])
        return RecordOutcome.UPDATED if updated else RecordOutcome.SKIPPED


class ProviderHandler(CollectionHandler):
    model = Provider
    serializer_class = records.ProviderRecordSerializer
    fields = ('name', 'phone', 'address', 'notes')

    def visible(self, user):
        return Provider.objects.accessible_to(user)

    def build(self, user, data):
        values = super().build(user, data)
        if data.get('organization_id'):
            values['organization'] = get_organization(organization_id=data['organization_id'], user=user)
        return values


class ClientHandler(CollectionHandler):
    model = Client
    serializer_class = records.ClientRecordSerializer
    fields = ('name', 'phone', 'address', 'notes')


class ProductHandler(CollectionHandler):
    model = Product
    serializer_class = records.ProductRecordSerializer
    fields = ('name', 'unit', 'description')


class OperationHandler(CollectionHandler):
    """
    Operations follow the lifecycle: a CLOSED server row is never changed,
    and a newer CLOSED client copy closes an OPEN server row.
    """

    model = Operation
    serializer_class = records.OperationRecordSerializer
    fields = ('description', 'price_per_unit', 'agreed_quantity', 'total_amount')

    def visible(self, user):
        return Operation.objects.accessible_to(user)

    def build(self, user, data):
        try:
            product = Product.objects.owned_by(user).get(id=data['product_id'])
        except Product.DoesNotExist:
            raise ProductNotFoundError()

        values = {
            **_pick(data, self.fields + ('operation_date',)),
            'user': user,
            'provider': get_provider(provider_id=data['provider_id'], user=user),
            'product': product,
            'operation_number': data.get('operation_number') or generate_document_number(),
            'status': data['status'],
        }
        if data.get('organization_id'):
            values['organization'] = get_organization(organization_id=data['organization_id'], user=user)
        if data['status'] == OperationStatus.CLOSED:
            values['closed_at'] = data.get('closed_at') or data['updated_at']
        return values

    def changes(self, user, data, existing):
        values = super().changes(user, data, existing)
        if data['status'] == OperationStatus.CLOSED:
            values['status'] = OperationStatus.CLOSED
            values['closed_at'] = data.get('closed_at') or data['updated_at']
        return values

    def guarded(self, user, data, existing):
        return super().guarded(user, data, existing).filter(status=OperationStatus.OPEN)

    def update(self, user, data, existing):
        if data['updated_at'] <= existing.updated_at:
            return RecordOutcome.SKIPPED
        if not existing.is_open:
            raise OperationClosedError("Closed operations cannot be changed.")
        return super().update(user, data, existing)


class MovementHandler(CollectionHandler):
    """Movements are immutable: known ids are skipped, new ones need an OPEN parent."""

    def visible(self, user):
        return self.model.objects.filter(operation__in=Operation.objects.accessible_to(user))

    def parent(self, user: User, data: dict) -> Operation:
        try:
            operation = (
                Operation.objects
                .accessible_to(user)
                .select_for_update()
                .get(id=data['operation_id'])
            )
        except Operation.DoesNotExist:
            raise OperationNotFoundError()
        if not operation.is_open:
            raise OperationClosedError()
        return operation

    def build(self, user, data):
        return {'operation': self.parent(user, data), **_pick(data, self.fields)}

    def create(self, user, data):
        movement = super().create(user, data)
        touch_operation(movement.operation_id, at=max(timezone.now(), data['updated_at']))
        return movement

    def update(self, user, data, existing):
        return RecordOutcome.SKIPPED


class MoneyMovementHandler(MovementHandler):
    model = MoneyMovement
    serializer_class = records.MoneyMovementRecordSerializer
    fields = ('amount', 'movement_type', 'payment_method', 'description', 'movement_date')


class ProductMovementHandler(MovementHandler):
    model = ProductMovement
    serializer_class = records.ProductMovementRecordSerializer
    fields = ('gross_weight', 'tare', 'movement_type', 'description', 'movement_date')

    def build(self, user, data):
        values = super().build(user, data)
        values['net_weight'] = resolve_net_weight(
            data.get('net_weight'), data.get('gross_weight'), data.get('tare'),
        )
        return values


class ExpenseHandler(CollectionHandler):
    model = Expense
    serializer_class = records.ExpenseRecordSerializer
    fields = ('amount', 'scope', 'expense_type', 'description', 'expense_date')

    def _operation(self, user: User, data: dict) -> Any:
        if not data.get('operation_id'):
            return None
        return get_operation_for_user(operation_id=data['operation_id'], user=user)

    def build(self, user, data):
        return {**super().build(user, data), 'operation': self._operation(user, data)}

    def changes(self, user, data, existing):
        values = super().changes(user, data, existing)
        if 'operation_id' in data:
            values['operation'] = self._operation(user, data)
        return values


class IncomeHandler(CollectionHandler):
    model = Income
    serializer_class = records.IncomeRecordSerializer
    fields = ('amount', 'scope', 'description', 'income_date')


# Dependency order: referenced collections first
HANDLERS = {
    'providers': ProviderHandler(),
    'clients': ClientHandler(),
    'products': ProductHandler(),
    'operations': OperationHandler(),
    'money_movements': MoneyMovementHandler(),
    'product_movements': ProductMovementHandler(),
    'expenses': ExpenseHandler(),
    'incomes': IncomeHandler(),
}
