"""
Operation Lifecycle
===================

State machine for purchase operations::

    OPEN ──close──> CLOSED

An OPEN operation accepts money and product movements and edits to its
agreement (description, quantity, price, total). A CLOSED operation is
terminal: there is no re-open. Callers that are neither the owner nor a
member of the operation's organization get ``OperationNotFoundError``,
never a distinct "forbidden" error.

Status-dependent writes are single filtered ``update()`` statements that
combine the access check, the status guard and the mutation, so a
concurrent close cannot interleave with an edit.
"""

import logging
import uuid
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.directory.models import Product
from apps.directory.services import ProductNotFoundError, get_provider
from apps.operations.models import (
    MoneyMovement,
    Operation,
    OperationStatus,
    PaymentMethod,
    ProductMovement,
)
from apps.organizations.services import get_organization

from .exceptions import (
    InvalidMovementError,
    OperationAlreadyClosedError,
    OperationClosedError,
    OperationNotFoundError,
    OperationNumberConflictError,
)
from .numbering import generate_document_number

logger = logging.getLogger(__name__)

OPERATION_MUTABLE_FIELDS = ('description', 'agreed_quantity', 'price_per_unit', 'total_amount')


def _as_uuid(value) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise OperationNotFoundError()


def _accessible(user: User) -> QuerySet[Operation]:
    return Operation.objects.accessible_to(user)


# =============================================================================
# Reads
# =============================================================================

def get_operation_for_user(*, operation_id, user: User) -> Operation:
    """
    Fetch an operation the user owns or shares through an organization.

    Raises:
        OperationNotFoundError: If absent or not accessible
    """
    try:
        return (
            _accessible(user)
            .select_related('provider', 'product', 'organization', 'user')
            .get(id=_as_uuid(operation_id))
        )
    except Operation.DoesNotExist:
        raise OperationNotFoundError()


def list_operations(
    *,
    user: User,
    status: Optional[str] = None,
    provider_id: Optional[UUID] = None,
    organization_id: Optional[UUID] = None,
    search: Optional[str] = None,
) -> QuerySet[Operation]:
    queryset = _accessible(user).select_related('provider', 'product', 'organization')

    if status:
        queryset = queryset.filter(status=status)
    if provider_id:
        queryset = queryset.filter(provider_id=provider_id)
    if organization_id:
        queryset = queryset.filter(organization_id=organization_id)
    if search:
        queryset = queryset.filter(
            Q(operation_number__icontains=search) |
            Q(description__icontains=search)
        )

    return queryset.prefetch_related('money_movements', 'product_movements')


# =============================================================================
# Creation
# =============================================================================

def create_operation(
    *,
    user: User,
    provider_id: UUID,
    product_id: UUID,
    price_per_unit: Decimal,
    agreed_quantity: Optional[Decimal] = None,
    total_amount: Optional[Decimal] = None,
    description: str = "",
    organization_id: Optional[UUID] = None,
    operation_date=None,
    max_retries: Optional[int] = None,
) -> Operation:
    """
    Open a new operation with a generated ``YYYYMMDD-XXXX`` number.

    The number has only four random characters, so a collision is
    retried with a fresh suffix, each attempt in its own transaction.

    Raises:
        ProviderNotFoundError: Provider not visible to the user
        ProductNotFoundError: Product not owned by the user
        OrganizationNotFoundError: User is not a member of the organization
        OperationNumberConflictError: No unique number after ``max_retries``
    """
    provider = get_provider(provider_id=provider_id, user=user)

    try:
        product = Product.objects.owned_by(user).get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError()

    organization = None
    if organization_id:
        organization = get_organization(organization_id=organization_id, user=user)

    max_retries = max_retries or settings.OPERATION_NUMBER_MAX_RETRIES

    for attempt in range(max_retries):
        number = generate_document_number()

        try:
            with transaction.atomic():
                operation = Operation.objects.create(
                    operation_number=number,
                    user=user,
                    provider=provider,
                    product=product,
                    organization=organization,
                    price_per_unit=price_per_unit,
                    agreed_quantity=agreed_quantity,
                    total_amount=total_amount,
                    description=description,
                    operation_date=operation_date or timezone.now(),
                )
        except IntegrityError:
            if not Operation.objects.filter(operation_number=number).exists():
                raise
            logger.warning("Operation number collision on %s (attempt %d)", number, attempt + 1)
            continue

        logger.info("Operation %s opened by user %s", operation.operation_number, user.id)
        return operation

    raise OperationNumberConflictError(
        f"Failed to generate unique operation number after {max_retries} attempts"
    )


# =============================================================================
# Movements
# =============================================================================

def resolve_net_weight(
    net_weight: Optional[Decimal],
    gross_weight: Optional[Decimal] = None,
    tare: Optional[Decimal] = None,
) -> Decimal:
    """
    Net weight for a product movement.

    Net is authoritative; when omitted it is derived from gross - tare.
    When all three are given they must agree.

    Raises:
        InvalidMovementError: Missing, inconsistent or non-positive weight
    """
    derived = None
    if gross_weight is not None and tare is not None:
        derived = Decimal(gross_weight) - Decimal(tare)

    if net_weight is None:
        if derived is None:
            raise InvalidMovementError("net_weight is required unless gross_weight and tare are given.")
        net_weight = derived
    elif derived is not None and Decimal(net_weight) != derived:
        raise InvalidMovementError("net_weight must equal gross_weight minus tare.")

    if Decimal(net_weight) <= 0:
        raise InvalidMovementError("net_weight must be greater than zero.")

    return Decimal(net_weight)


def _lock_open_operation(operation_id, user: User) -> Operation:
    """Lock an accessible operation row and require it to be OPEN."""
    try:
        operation = (
            _accessible(user)
            .select_for_update()
            .get(id=_as_uuid(operation_id))
        )
    except Operation.DoesNotExist:
        raise OperationNotFoundError()

    if not operation.is_open:
        raise OperationClosedError()

    return operation


def touch_operation(operation_id: UUID, at=None) -> None:
    """Advance the operation's last-modified timestamp, never moving it backwards."""
    at = at or timezone.now()
    Operation.objects.filter(id=operation_id, updated_at__lt=at).update(updated_at=at)


@transaction.atomic
def add_money_movement(
    *,
    operation_id,
    user: User,
    amount: Decimal,
    movement_type: str,
    payment_method: str = PaymentMethod.CASH,
    description: str = "",
    movement_date=None,
) -> MoneyMovement:
    """
    Record a money movement on an OPEN operation.

    Raises:
        OperationNotFoundError: Operation absent or not accessible
        OperationClosedError: Operation is CLOSED
        InvalidMovementError: Amount is not positive
    """
    operation = _lock_open_operation(operation_id, user)

    if amount is None or Decimal(amount) <= 0:
        raise InvalidMovementError("amount must be greater than zero.")

    movement = MoneyMovement.objects.create(
        operation=operation,
        amount=amount,
        movement_type=movement_type,
        payment_method=payment_method,
        description=description,
        movement_date=movement_date or timezone.now(),
    )
    touch_operation(operation.id)

    return movement


@transaction.atomic
def add_product_movement(
    *,
    operation_id,
    user: User,
    movement_type: str,
    net_weight: Optional[Decimal] = None,
    gross_weight: Optional[Decimal] = None,
    tare: Optional[Decimal] = None,
    description: str = "",
    movement_date=None,
) -> ProductMovement:
    """
    Record a product movement on an OPEN operation.

    Raises:
        OperationNotFoundError: Operation absent or not accessible
        OperationClosedError: Operation is CLOSED
        InvalidMovementError: Weights missing, inconsistent or not positive
    """
    operation = _lock_open_operation(operation_id, user)
    net = resolve_net_weight(net_weight, gross_weight, tare)

    movement = ProductMovement.objects.create(
        operation=operation,
        net_weight=net,
        gross_weight=gross_weight,
        tare=tare,
        movement_type=movement_type,
        description=description,
        movement_date=movement_date or timezone.now(),
    )
    touch_operation(operation.id)

    return movement


# =============================================================================
# Mutations
# =============================================================================

def _raise_for_missing_open(operation_id: UUID, user: User, closed_error: type) -> None:
    if _accessible(user).filter(id=operation_id).exists():
        raise closed_error()
    raise OperationNotFoundError()


def update_operation(*, operation_id, user: User, **fields) -> Operation:
    """
    Edit an OPEN operation's agreement.

    Raises:
        OperationNotFoundError: Operation absent or not accessible
        OperationClosedError: Operation is CLOSED
    """
    pk = _as_uuid(operation_id)
    changes = {k: v for k, v in fields.items() if k in OPERATION_MUTABLE_FIELDS}

    updated = (
        _accessible(user)
        .filter(id=pk, status=OperationStatus.OPEN)
        .update(**changes, updated_at=timezone.now())
    )
    if updated == 0:
        _raise_for_missing_open(pk, user, OperationClosedError)

    return get_operation_for_user(operation_id=pk, user=user)


def close_operation(*, operation_id, user: User) -> Operation:
    """
    Close an OPEN operation, stamping ``closed_at``.

    Raises:
        OperationNotFoundError: Operation absent or not accessible
        OperationAlreadyClosedError: Operation was already CLOSED
    """
    pk = _as_uuid(operation_id)
    now = timezone.now()

    updated = (
        _accessible(user)
        .filter(id=pk, status=OperationStatus.OPEN)
        .update(status=OperationStatus.CLOSED, closed_at=now, updated_at=now)
    )
    if updated == 0:
        _raise_for_missing_open(pk, user, OperationAlreadyClosedError)

    logger.info("Operation %s closed by user %s", pk, user.id)
    return get_operation_for_user(operation_id=pk, user=user)


@transaction.atomic
def delete_operation(*, operation_id, user: User) -> None:
    """
    Delete an operation and its movements. Owner only.

    Operation-scoped expenses are kept and detached.

    Raises:
        OperationNotFoundError: Operation absent or not owned by the user
    """
    deleted, _ = Operation.objects.filter(id=_as_uuid(operation_id), user=user).delete()
    if deleted == 0:
        raise OperationNotFoundError()

    logger.info("Operation %s deleted by user %s", operation_id, user.id)
