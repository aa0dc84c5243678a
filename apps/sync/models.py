from django.db import models
import uuid


class SyncType(models.TextChoices):
    PUSH = 'push', 'Push'
    PULL = 'pull', 'Pull'


class SyncStatus(models.TextChoices):
    SUCCESS = 'success', 'Success'
    FAILED = 'failed', 'Failed'


class SyncLogQuerySet(models.QuerySet):
    """Bulk writes are refused; rows are only ever inserted."""

    def update(self, **kwargs):
        from apps.sync.services.exceptions import SyncLogImmutableError
        raise SyncLogImmutableError()

    def delete(self):
        from apps.sync.services.exceptions import SyncLogImmutableError
        raise SyncLogImmutableError()


class SyncLog(models.Model):
    """Audit row for one push or pull call. Append-only."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='sync_logs',
    )
    sync_type = models.CharField(max_length=4, choices=SyncType.choices)
    device_id = models.CharField(max_length=100, blank=True)
    records_count = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=7, choices=SyncStatus.choices)
    error_message = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = SyncLogQuerySet.as_manager()

    class Meta:
        db_table = 'sync_logs'
        indexes = [
            models.Index(fields=['user', '-created_at'], name='sync_logs_user_created_idx'),
            models.Index(fields=['user', 'status', '-created_at'], name='sync_logs_user_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.sync_type} {self.status} ({self.records_count})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            from apps.sync.services.exceptions import SyncLogImmutableError
            raise SyncLogImmutableError()
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        from apps.sync.services.exceptions import SyncLogImmutableError
        raise SyncLogImmutableError()
