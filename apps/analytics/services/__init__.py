"""
Analytics services package.
"""

from .dashboard import get_dashboard

__all__ = [
    'get_dashboard',
]
