"""
Balance Engine
==============

Pure aggregation of an operation's movement history into outstanding
balances and progress percentages.

Sign table
----------

Money movements (positive contributes to money paid in, reducing what is owed):

    ===========  ====  =============================================
    ADVANCE       +1   cash handed over before delivery
    PAYMENT       +1   cash handed over against delivery
    DISCOUNT      +1   reduces the amount owed without cash changing hands
    ADJUSTMENT    -1   correction that increases the amount owed
    ===========  ====  =============================================

Product movements (positive contributes to delivered quantity):

    ===========  ====  =============================================
    DELIVERY      +1   product received
    LOSS          +1   counted as delivered-equivalent; the provider's
                       obligation is considered fulfilled for that weight
    ADJUSTMENT    -1   correction that increases the product still owed
    ===========  ====  =============================================

Only the progress percentages are rounded (two places, ROUND_HALF_UP);
sums and balances are exact ``Decimal`` arithmetic.

Example::

    >>> from decimal import Decimal
    >>> op = {'agreed_quantity': Decimal('100'), 'price_per_unit': Decimal('10')}
    >>> money = [{'amount': Decimal('200'), 'movement_type': 'ADVANCE'},
    ...          {'amount': Decimal('150'), 'movement_type': 'ADVANCE'}]
    >>> product = [{'net_weight': Decimal('40'), 'movement_type': 'DELIVERY'},
    ...            {'net_weight': Decimal('20'), 'movement_type': 'DELIVERY'}]
    >>> balance = compute_balance(op, money, product)
    >>> balance.money_balance, balance.money_progress
    (Decimal('650'), Decimal('35.00'))
"""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from apps.operations.models import MoneyMovementType, ProductMovementType

ZERO = Decimal('0')
HUNDRED = Decimal('100')
PERCENT_PLACES = Decimal('0.01')
ZERO_PERCENT = Decimal('0.00')

MONEY_SIGNS = {
    MoneyMovementType.ADVANCE: 1,
    MoneyMovementType.PAYMENT: 1,
    MoneyMovementType.DISCOUNT: 1,
    MoneyMovementType.ADJUSTMENT: -1,
}

PRODUCT_SIGNS = {
    ProductMovementType.DELIVERY: 1,
    ProductMovementType.LOSS: 1,
    ProductMovementType.ADJUSTMENT: -1,
}


@dataclass(frozen=True)
class Balance:
    """
    Derived figures for one operation.

    ``total_advances`` is the net money paid in after applying the sign
    table; the name matches the field exposed by the API.
    """

    total_agreed_money: Decimal
    agreed_quantity: Decimal
    total_advances: Decimal
    total_delivered: Decimal
    money_balance: Decimal
    product_balance: Decimal
    money_progress: Decimal
    product_progress: Decimal
    money_by_type: dict = field(default_factory=dict)
    product_by_type: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return asdict(self)


def _read(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _decimal(value: Any) -> Decimal:
    """Coerce to Decimal; missing or unparsable values count as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= ZERO:
        return ZERO_PERCENT
    return (part / whole * HUNDRED).quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)


def total_agreed_money(operation: Any) -> Decimal:
    """Recorded total if present, otherwise quantity x price, otherwise zero."""
    recorded = _read(operation, 'total_amount')
    if recorded is not None:
        return _decimal(recorded)
    quantity = _read(operation, 'agreed_quantity')
    price = _read(operation, 'price_per_unit')
    if quantity is None or price is None:
        return ZERO
    return _decimal(quantity) * _decimal(price)


def _signed_totals(movements: Iterable[Any], amount_field: str, signs: dict) -> tuple[Decimal, dict]:
    net = ZERO
    by_type: dict[str, Decimal] = {str(kind): ZERO for kind in signs}

    for movement in movements:
        kind = _read(movement, 'movement_type')
        amount = _decimal(_read(movement, amount_field))
        sign = signs.get(kind)
        if sign is None:
            # Unknown types do not contribute
            continue
        by_type[str(kind)] += amount
        net += sign * amount

    return net, by_type


def compute_balance(
    operation: Any,
    money_movements: Iterable[Any],
    product_movements: Iterable[Any],
) -> Balance:
    """
    Aggregate an operation's movements into a Balance.

    Args:
        operation: Operation instance or mapping with ``price_per_unit``,
            ``agreed_quantity`` and ``total_amount`` (any may be None).
        money_movements: Instances or mappings with ``amount`` and
            ``movement_type``.
        product_movements: Instances or mappings with ``net_weight`` and
            ``movement_type``.

    Returns:
        Balance. Order of the movements does not affect the result and
        the function never raises.
    """
    agreed_money = total_agreed_money(operation)
    agreed_quantity = _decimal(_read(operation, 'agreed_quantity'))

    money_in, money_by_type = _signed_totals(money_movements, 'amount', MONEY_SIGNS)
    delivered, product_by_type = _signed_totals(product_movements, 'net_weight', PRODUCT_SIGNS)

    return Balance(
        total_agreed_money=agreed_money,
        agreed_quantity=agreed_quantity,
        total_advances=money_in,
        total_delivered=delivered,
        money_balance=agreed_money - money_in,
        product_balance=agreed_quantity - delivered,
        money_progress=_percentage(money_in, agreed_money),
        product_progress=_percentage(delivered, agreed_quantity),
        money_by_type=money_by_type,
        product_by_type=product_by_type,
    )
