"""
Sync audit log.

One row per push or pull call, written whether the call succeeded or
failed. ``get_sync_status`` reads the most recent rows and, separately,
the newest successful one, so a run of failures never hides when the
device last synced.
"""

import logging
from typing import Optional

from django.conf import settings

from apps.accounts.models import User
from apps.sync.models import SyncLog, SyncStatus

logger = logging.getLogger(__name__)


def record_sync(
    *,
    user: User,
    sync_type: str,
    records_count: int,
    status: str,
    error_message: str = "",
    device_id: str = "",
) -> SyncLog:
    return SyncLog.objects.create(
        user=user,
        sync_type=sync_type,
        records_count=records_count,
        status=status,
        error_message=error_message,
        device_id=device_id or "",
    )


def get_sync_status(*, user: User, limit: Optional[int] = None) -> dict:
    """
    Recent sync history for a user.

    Args:
        user: Owner of the history
        limit: Rows to return; capped at ``SYNC_HISTORY_LIMIT``

    Returns:
        dict with ``last_sync`` (datetime of the newest success or None)
        and ``history`` (newest first)
    """
    cap = settings.SYNC_HISTORY_LIMIT
    limit = min(limit or cap, cap)

    history = list(SyncLog.objects.filter(user=user).order_by('-created_at')[:limit])
    last_sync = (
        SyncLog.objects
        .filter(user=user, status=SyncStatus.SUCCESS)
        .order_by('-created_at')
        .values_list('created_at', flat=True)
        .first()
    )

    return {'last_sync': last_sync, 'history': history}
