"""Deletion helpers shared by the client and product endpoints."""

from django.db import models
from django.db.models import ProtectedError

from .exceptions import RecordInUseError


def delete_record(*, instance: models.Model) -> None:
    """
    Delete ``instance`` unless protected foreign keys still point at it.

    Raises:
        RecordInUseError: If operations or sales reference the record
    """
    try:
        instance.delete()
    except ProtectedError:
        raise RecordInUseError()
