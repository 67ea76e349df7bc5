from django.contrib import admin
from .models import CartEntry


@admin.register(CartEntry)
class CartEntryAdmin(admin.ModelAdmin):
    list_display = ['user', 'catalog_item', 'added_at']
    search_fields = ['user__email', 'catalog_item__title', 'catalog_item__course_code']
    readonly_fields = ['added_at']
    ordering = ['-added_at']
