from django.contrib import admin
from .models import Purchase


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Read-only view of entitlements.

    Purchases are minted by payment approval only.
    """

    list_display = ['user', 'catalog_item', 'order', 'granted_at']
    search_fields = ['user__email', 'catalog_item__title', 'catalog_item__course_code']
    readonly_fields = ['user', 'catalog_item', 'order', 'granted_at']
    date_hierarchy = 'granted_at'
    ordering = ['-granted_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'catalog_item', 'order')
