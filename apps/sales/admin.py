# ==========================================
# apps/sales/admin.py
# ==========================================

from django.contrib import admin
from apps.sales.models import Sale, SalePayment


class SalePaymentInline(admin.TabularInline):
    model = SalePayment
    extra = 0
    fields = ['amount', 'payment_method', 'payment_date', 'description']
    readonly_fields = fields
    can_delete = False


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['sale_number', 'status', 'client', 'product', 'total_amount', 'user', 'sale_date']
    list_filter = ['status', 'sale_date']
    search_fields = ['sale_number', 'client__name', 'user__email']
    readonly_fields = ['sale_number', 'total_amount', 'status', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'client', 'product']
    inlines = [SalePaymentInline]
    date_hierarchy = 'sale_date'
