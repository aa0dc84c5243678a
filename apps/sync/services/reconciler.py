"""
Sync Reconciler
===============

Merges batches pushed by offline clients into server state and serves
deltas back on pull.

Push
----
Collections are applied in dependency order (see ``HANDLERS``). Every
record is validated and applied inside its own savepoint and folded into
one of four outcomes::

    CREATED   id unknown to the server, row inserted with client timestamps
    UPDATED   client copy strictly newer, mutable fields overwritten
    SKIPPED   server copy is as new or newer (or an immutable movement)
    ERROR     invalid record, unresolved reference or lifecycle violation

A rejected record never affects its neighbours. Any other database
error (``DatabaseError`` other than ``IntegrityError``) aborts the call:
a ``failed`` SyncLog row is written and ``SyncUnavailableError`` raised.

Pull
----
``sync_timestamp`` is taken before anything is read, so a write that
lands during the pull is sent again next time rather than lost.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Prefetch, Q
from django.utils import timezone

from apps.accounts.models import User
from apps.directory.models import Client, Product, Provider
from apps.finance.models import Expense, Income
from apps.operations.models import Operation
from apps.organizations.models import Organization, OrganizationMember
from apps.sync.models import SyncStatus, SyncType
from apps.sync.serializers import COLLECTIONS
from config.exceptions import DomainError

from .audit import record_sync
from .exceptions import SyncUnavailableError
from .handlers import HANDLERS, CollectionHandler, RecordOutcome

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)


@dataclass
class CollectionResult:
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list = field(default_factory=list)

    def add(self, outcome: RecordOutcome, record_id=None, error: str = "", code: str = "") -> None:
        if outcome is RecordOutcome.ERROR:
            self.errors.append({
                'id': str(record_id) if record_id is not None else None,
                'error': error,
                'code': code,
            })
        else:
            setattr(self, outcome.value, getattr(self, outcome.value) + 1)

    def as_dict(self) -> dict:
        return {
            'created': self.created,
            'updated': self.updated,
            'skipped': self.skipped,
            'errors': self.errors,
        }


@dataclass
class PullResult:
    operations: list
    providers: list
    clients: list
    expenses: list
    incomes: list
    products: list
    organizations: list
    sync_timestamp: datetime

    @property
    def records_count(self) -> int:
        """Delta rows only; reference data is resent every time."""
        return (
            len(self.operations) + len(self.providers) + len(self.clients)
            + len(self.expenses) + len(self.incomes)
        )

    def data(self) -> dict:
        return {
            'operations': self.operations,
            'providers': self.providers,
            'clients': self.clients,
            'expenses': self.expenses,
            'incomes': self.incomes,
            'products': self.products,
            'organizations': self.organizations,
        }


def _describe(errors) -> str:
    """Flatten serializer errors into one line."""
    if isinstance(errors, dict):
        return "; ".join(f"{name}: {_describe(detail)}" for name, detail in errors.items())
    if isinstance(errors, list):
        return " ".join(_describe(detail) for detail in errors)
    return str(errors)


def _apply_record(handler: CollectionHandler, user: User, record: dict, result: CollectionResult) -> None:
    serializer = handler.serializer_class(data=record)
    if not serializer.is_valid():
        result.add(RecordOutcome.ERROR, record.get('id'), _describe(serializer.errors), 'invalid')
        return

    data = serializer.validated_data
    try:
        with transaction.atomic():
            outcome = handler.apply(user, data)
    except DomainError as exc:
        result.add(RecordOutcome.ERROR, data['id'], exc.message, exc.code)
    except IntegrityError as exc:
        result.add(RecordOutcome.ERROR, data['id'], str(exc), 'conflict')
    except ValidationError as exc:
        result.add(RecordOutcome.ERROR, data['id'], _describe(exc.messages), 'invalid')
    else:
        result.add(outcome)


def _record_failure(*, user: User, sync_type: str, records_count: int, error: Exception, device_id: str) -> None:
    try:
        with transaction.atomic():
            record_sync(
                user=user,
                sync_type=sync_type,
                records_count=records_count,
                status=SyncStatus.FAILED,
                error_message=str(error),
                device_id=device_id,
            )
    except DatabaseError:
        logger.exception("Could not write failed %s sync log for user %s", sync_type, user.id)


def push(*, user: User, batch: dict, device_id: str = "") -> dict:
    """
    Apply a batch of client changes.

    Args:
        user: Caller; every record is scoped to what this user may see
        batch: ``{collection: [record, ...]}`` for any of ``COLLECTIONS``
        device_id: Optional client device identifier for the audit log

    Returns:
        ``{collection: {created, updated, skipped, errors}}`` for every
        collection, in processing order

    Raises:
        SyncUnavailableError: Storage failed; nothing further was applied
    """
    records_count = sum(len(batch.get(name) or []) for name in COLLECTIONS)
    results = {}

    try:
        for name in COLLECTIONS:
            handler = HANDLERS[name]
            result = CollectionResult()
            for record in batch.get(name) or []:
                _apply_record(handler, user, record, result)
            results[name] = result.as_dict()

        record_sync(
            user=user,
            sync_type=SyncType.PUSH,
            records_count=records_count,
            status=SyncStatus.SUCCESS,
            device_id=device_id,
        )
    except DatabaseError as exc:
        logger.exception("Push aborted for user %s", user.id)
        _record_failure(
            user=user,
            sync_type=SyncType.PUSH,
            records_count=records_count,
            error=exc,
            device_id=device_id,
        )
        raise SyncUnavailableError() from exc

    logger.info(
        "Push by user %s: %d records, %d rejected",
        user.id,
        records_count,
        sum(len(r['errors']) for r in results.values()),
    )
    return results


def _collect(user: User, since: datetime, sync_timestamp: datetime) -> PullResult:
    own_expenses = Expense.objects.filter(user=user)

    operations = list(
        Operation.objects
        .accessible_to(user)
        .filter(
            Q(updated_at__gt=since) |
            Q(expenses__in=own_expenses.filter(updated_at__gt=since))
        )
        .distinct()
        .select_related('user', 'provider', 'product')
        .prefetch_related(
            'money_movements',
            'product_movements',
            Prefetch('expenses', queryset=own_expenses.select_related('operation')),
        )
    )

    organizations = list(
        Organization.objects
        .for_member(user)
        .select_related('created_by')
        .prefetch_related(Prefetch('members', queryset=OrganizationMember.objects.select_related('user')))
    )

    return PullResult(
        operations=operations,
        providers=list(Provider.objects.accessible_to(user).filter(updated_at__gt=since)),
        clients=list(Client.objects.owned_by(user).filter(updated_at__gt=since)),
        expenses=list(own_expenses.filter(operation__isnull=True, updated_at__gt=since)),
        incomes=list(Income.objects.owned_by(user).filter(updated_at__gt=since)),
        products=list(Product.objects.owned_by(user)),
        organizations=organizations,
        sync_timestamp=sync_timestamp,
    )


def pull(*, user: User, since: Optional[datetime] = None, device_id: str = "") -> PullResult:
    """
    Everything visible to the user that changed after ``since``.

    Products and organizations are reference data and always sent in full.

    Raises:
        SyncUnavailableError: Storage failed while reading
    """
    sync_timestamp = timezone.now()

    try:
        result = _collect(user, since or EPOCH, sync_timestamp)
        record_sync(
            user=user,
            sync_type=SyncType.PULL,
            records_count=result.records_count,
            status=SyncStatus.SUCCESS,
            device_id=device_id,
        )
    except DatabaseError as exc:
        logger.exception("Pull failed for user %s", user.id)
        _record_failure(
            user=user,
            sync_type=SyncType.PULL,
            records_count=0,
            error=exc,
            device_id=device_id,
        )
        raise SyncUnavailableError() from exc

    return result
