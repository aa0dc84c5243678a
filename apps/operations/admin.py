# ==========================================
# apps/operations/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html

from apps.operations.models import MoneyMovement, Operation, OperationStatus, ProductMovement


class MoneyMovementInline(admin.TabularInline):
    model = MoneyMovement
    extra = 0
    fields = ['movement_type', 'amount', 'payment_method', 'movement_date', 'description']
    readonly_fields = fields
    can_delete = False


class ProductMovementInline(admin.TabularInline):
    model = ProductMovement
    extra = 0
    fields = ['movement_type', 'net_weight', 'gross_weight', 'tare', 'movement_date', 'description']
    readonly_fields = fields
    can_delete = False


@admin.register(Operation)
class OperationAdmin(admin.ModelAdmin):
    list_display = [
        'operation_number',
        'status_badge',
        'provider',
        'product',
        'user',
        'organization',
        'operation_date',
    ]
    list_filter = ['status', 'organization', 'operation_date']
    search_fields = ['operation_number', 'description', 'provider__name', 'user__email']
    readonly_fields = ['operation_number', 'closed_at', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'provider', 'product']
    inlines = [MoneyMovementInline, ProductMovementInline]
    date_hierarchy = 'operation_date'

    def status_badge(self, obj):
        color = '#28a745' if obj.status == OperationStatus.OPEN else '#6c757d'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px;">{}</span>',
            color,
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'


@admin.register(MoneyMovement)
class MoneyMovementAdmin(admin.ModelAdmin):
    list_display = ['operation', 'movement_type', 'amount', 'payment_method', 'movement_date']
    list_filter = ['movement_type', 'payment_method']
    search_fields = ['operation__operation_number', 'description']
    raw_id_fields = ['operation']


@admin.register(ProductMovement)
class ProductMovementAdmin(admin.ModelAdmin):
    list_display = ['operation', 'movement_type', 'net_weight', 'movement_date']
    list_filter = ['movement_type']
    search_fields = ['operation__operation_number', 'description']
    raw_id_fields = ['operation']
