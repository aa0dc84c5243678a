"""
Sales services package.

Sale registration, installment payments and payment summaries.
"""

from .exceptions import (
    SalesServiceError,
    SaleNotFoundError,
    SaleAlreadyPaidError,
    PaymentExceedsBalanceError,
    SaleNumberConflictError,
)
from .sale_management import (
    list_sales,
    get_sale,
    create_sale,
    add_sale_payment,
    get_sale_summary,
    delete_sale,
)

__all__ = [
    # Exceptions
    'SalesServiceError',
    'SaleNotFoundError',
    'SaleAlreadyPaidError',
    'PaymentExceedsBalanceError',
    'SaleNumberConflictError',
    # Sales
    'list_sales',
    'get_sale',
    'create_sale',
    'add_sale_payment',
    'get_sale_summary',
    'delete_sale',
]
