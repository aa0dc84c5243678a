"""
Finance services package.

Expense and income bookkeeping plus per-scope summaries.
"""

from .exceptions import (
    FinanceServiceError,
    ExpenseNotFoundError,
    IncomeNotFoundError,
)
from .ledger import (
    list_expenses,
    get_expense,
    create_expense,
    update_expense,
    delete_expense,
    list_incomes,
    get_income,
    create_income,
    update_income,
    delete_income,
    get_finance_summary,
)

__all__ = [
    # Exceptions
    'FinanceServiceError',
    'ExpenseNotFoundError',
    'IncomeNotFoundError',
    # Expenses
    'list_expenses',
    'get_expense',
    'create_expense',
    'update_expense',
    'delete_expense',
    # Incomes
    'list_incomes',
    'get_income',
    'create_income',
    'update_income',
    'delete_income',
    # Summary
    'get_finance_summary',
]
