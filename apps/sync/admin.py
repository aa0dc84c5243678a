# ==========================================
# apps/sync/admin.py
# ==========================================

from django.contrib import admin
from apps.sync.models import SyncLog


@admin.register(SyncLog)
class SyncLogAdmin(admin.ModelAdmin):
    """Read-only view of the sync audit trail."""

    list_display = ['user', 'sync_type', 'status', 'records_count', 'device_id', 'created_at']
    list_filter = ['sync_type', 'status', 'created_at']
    search_fields = ['user__email', 'device_id', 'error_message']
    readonly_fields = [
        'id', 'user', 'sync_type', 'device_id', 'records_count', 'status', 'error_message', 'created_at',
    ]
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
