# ==========================================
# apps/finance/admin.py
# ==========================================

from django.contrib import admin
from apps.finance.models import Expense, Income


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['expense_type', 'amount', 'scope', 'user', 'operation', 'expense_date']
    list_filter = ['scope', 'expense_type', 'expense_date']
    search_fields = ['description', 'user__email', 'operation__operation_number']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user', 'operation']
    date_hierarchy = 'expense_date'


@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    list_display = ['amount', 'scope', 'user', 'income_date']
    list_filter = ['scope', 'income_date']
    search_fields = ['description', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    date_hierarchy = 'income_date'
