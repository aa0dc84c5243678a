"""Human-readable document numbers: ``YYYYMMDD-XXXX``."""

import uuid
from datetime import date
from typing import Optional

from django.utils import timezone


def generate_document_number(prefix: str = "", on: Optional[date] = None) -> str:
    """
    Date of creation plus four random uppercase hex characters.

    >>> generate_document_number(on=date(2025, 1, 27))  # doctest: +SKIP
    '20250127-A3F9'
    """
    on = on or timezone.localdate()
    suffix = uuid.uuid4().hex[:4].upper()
    return f"{prefix}{on:%Y%m%d}-{suffix}"
