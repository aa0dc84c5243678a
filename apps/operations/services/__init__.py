"""
Operations services package.

Balance computation and the operation lifecycle (creation, movements,
edits, close, delete).
"""

from .exceptions import (
    OperationsServiceError,
    OperationNotFoundError,
    OperationClosedError,
    OperationAlreadyClosedError,
    OperationNumberConflictError,
    InvalidMovementError,
)
from .balance import Balance, compute_balance, total_agreed_money
from .numbering import generate_document_number
from .lifecycle import (
    get_operation_for_user,
    list_operations,
    create_operation,
    resolve_net_weight,
    touch_operation,
    add_money_movement,
    add_product_movement,
    update_operation,
    close_operation,
    delete_operation,
)

__all__ = [
    # Exceptions
    'OperationsServiceError',
    'OperationNotFoundError',
    'OperationClosedError',
    'OperationAlreadyClosedError',
    'OperationNumberConflictError',
    'InvalidMovementError',
    # Balance Engine
    'Balance',
    'compute_balance',
    'total_agreed_money',
    # Lifecycle
    'generate_document_number',
    'get_operation_for_user',
    'list_operations',
    'create_operation',
    'resolve_net_weight',
    'touch_operation',
    'add_money_movement',
    'add_product_movement',
    'update_operation',
    'close_operation',
    'delete_operation',
]
