"""
Sale management service.

Sales move through PENDING -> PARTIAL -> COMPLETED as payments arrive.
Status is always recomputed from the sum of payments while the sale row
is locked, so concurrent payments cannot overpay a sale.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import QuerySet, Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.directory.models import Client, Product
from apps.directory.services import ClientNotFoundError, ProductNotFoundError
from apps.operations.models import PaymentMethod
from apps.operations.services import generate_document_number
from apps.sales.models import Sale, SalePayment, SaleStatus

from .exceptions import (
    PaymentExceedsBalanceError,
    SaleAlreadyPaidError,
    SaleNotFoundError,
    SaleNumberConflictError,
)

logger = logging.getLogger(__name__)

SALE_NUMBER_PREFIX = 'V-'
ZERO = Decimal('0')
CENTS = Decimal('0.01')


def list_sales(
    *,
    user: User,
    status: Optional[str] = None,
    client_id: Optional[UUID] = None,
) -> QuerySet[Sale]:
    queryset = Sale.objects.filter(user=user).select_related('client', 'product')
    if status:
        queryset = queryset.filter(status=status)
    if client_id:
        queryset = queryset.filter(client_id=client_id)
    return queryset


def get_sale(*, sale_id, user: User) -> Sale:
    try:
        return (
            Sale.objects
            .select_related('client', 'product')
            .prefetch_related('payments')
            .get(id=sale_id, user=user)
        )
    except (Sale.DoesNotExist, ValueError, ValidationError):
        raise SaleNotFoundError()


def create_sale(
    *,
    user: User,
    client_id: UUID,
    product_id: UUID,
    quantity: Decimal,
    price_per_unit: Decimal,
    description: str = "",
    sale_date=None,
    max_retries: Optional[int] = None,
) -> Sale:
    """
    Register a sale with a ``V-YYYYMMDD-XXXX`` number.

    Raises:
        ClientNotFoundError: Client not owned by the user
        ProductNotFoundError: Product not owned by the user
        SaleNumberConflictError: No unique number after ``max_retries``
    """
    try:
        client = Client.objects.owned_by(user).get(id=client_id)
    except (Client.DoesNotExist, ValidationError):
        raise ClientNotFoundError()
    try:
        product = Product.objects.owned_by(user).get(id=product_id)
    except (Product.DoesNotExist, ValidationError):
        raise ProductNotFoundError()

    max_retries = max_retries or settings.OPERATION_NUMBER_MAX_RETRIES
    total = (Decimal(quantity) * Decimal(price_per_unit)).quantize(CENTS, rounding=ROUND_HALF_UP)

    for attempt in range(max_retries):
        number = generate_document_number(prefix=SALE_NUMBER_PREFIX)

        try:
            with transaction.atomic():
                sale = Sale.objects.create(
                    sale_number=number,
                    user=user,
                    client=client,
                    product=product,
                    quantity=quantity,
                    price_per_unit=price_per_unit,
                    total_amount=total,
                    description=description,
                    sale_date=sale_date or timezone.now(),
                )
        except IntegrityError:
            if not Sale.objects.filter(sale_number=number).exists():
                raise
            logger.warning("Sale number collision on %s (attempt %d)", number, attempt + 1)
            continue

        logger.info("Sale %s registered by user %s", sale.sale_number, user.id)
        return sale

    raise SaleNumberConflictError(
        f"Failed to generate unique sale number after {max_retries} attempts"
    )


def get_sale_summary(sale: Sale) -> dict:
    """
    Payment summary for a sale.

    Returns:
        dict with ``total``, ``paid``, ``outstanding`` and ``status``
    """
    paid = sale.payments.aggregate(total=Sum('amount'))['total'] or ZERO
    return {
        'total': sale.total_amount,
        'paid': paid,
        'outstanding': sale.total_amount - paid,
        'status': sale.status,
    }


def _status_for(paid: Decimal, total: Decimal) -> str:
    if paid <= ZERO:
        return SaleStatus.PENDING
    if paid >= total:
        return SaleStatus.COMPLETED
    return SaleStatus.PARTIAL


@transaction.atomic
def add_sale_payment(
    *,
    sale_id,
    user: User,
    amount: Decimal,
    payment_method: str = PaymentMethod.CASH,
    description: str = "",
    payment_date=None,
) -> SalePayment:
    """
    Record a payment and recompute the sale's status.

    Raises:
        SaleNotFoundError: Sale not owned by the user
        SaleAlreadyPaidError: Sale is COMPLETED
        PaymentExceedsBalanceError: Amount is larger than what is outstanding
    """
    try:
        sale = Sale.objects.select_for_update().get(id=sale_id, user=user)
    except (Sale.DoesNotExist, ValueError, ValidationError):
        raise SaleNotFoundError()

    if sale.status == SaleStatus.COMPLETED:
        raise SaleAlreadyPaidError()

    outstanding = get_sale_summary(sale)['outstanding']
    if Decimal(amount) > outstanding:
        raise PaymentExceedsBalanceError(
            f"Payment of {amount} exceeds the outstanding {outstanding}."
        )

    payment = SalePayment.objects.create(
        sale=sale,
        amount=amount,
        payment_method=payment_method,
        description=description,
        payment_date=payment_date or timezone.now(),
    )

    paid = sale.total_amount - outstanding + Decimal(amount)
    Sale.objects.filter(id=sale.id).update(
        status=_status_for(paid, sale.total_amount),
        updated_at=timezone.now(),
    )

    return payment


@transaction.atomic
def delete_sale(*, sale_id, user: User) -> None:
    try:
        deleted, _ = Sale.objects.filter(id=sale_id, user=user).delete()
    except ValidationError:
        raise SaleNotFoundError()
    if deleted == 0:
        raise SaleNotFoundError()
    logger.info("Sale %s deleted by user %s", sale_id, user.id)
