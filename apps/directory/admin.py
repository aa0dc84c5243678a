# ==========================================
# apps/directory/admin.py
# ==========================================

from django.contrib import admin
from apps.directory.models import Provider, Client, Product


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'user', 'organization', 'updated_at']
    list_filter = ['organization', 'created_at']
    search_fields = ['name', 'phone', 'address', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    ordering = ['name']


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'user', 'updated_at']
    search_fields = ['name', 'phone', 'address', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    ordering = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'unit', 'user', 'updated_at']
    list_filter = ['unit']
    search_fields = ['name', 'description', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    ordering = ['name']
