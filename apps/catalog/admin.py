from django.contrib import admin
from django.utils.html import format_html
from .models import ApprovalStatus, BundleDiscount, CatalogItem


BADGE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


@admin.register(CatalogItem)
class CatalogItemAdmin(admin.ModelAdmin):
    """
    Admin interface for cheat sheets.

    Moderation happens here: approve or reject uploads and deactivate
    items. Prices are entered in satang.
    """

    list_display = [
        'title',
        'course_code',
        'get_price_display',
        'approval_badge',
        'is_active',
        'created_by',
        'created_at',
    ]

    list_filter = [
        'approval_status',
        'is_active',
        'created_at',
    ]

    search_fields = [
        'title',
        'course_code',
        'created_by__email',
    ]

    readonly_fields = ['created_at', 'updated_at']
    ordering = ['course_code', 'title']

    def get_price_display(self, obj):
        if obj.is_free:
            return format_html(BADGE, '#6B8E5E', 'white', 'Free')
        return f"{obj.price:.2f} THB"
    get_price_display.short_description = 'Price'
    get_price_display.admin_order_field = 'price_minor'

    def approval_badge(self, obj):
        """Display moderation status as colored badge."""
        colors = {
            ApprovalStatus.PENDING: ('#E5C49A', '#2C1810'),
            ApprovalStatus.APPROVED: ('#6B8E5E', 'white'),
            ApprovalStatus.REJECTED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.approval_status, ('#ccc', '#666'))
        return format_html(BADGE, bg, fg, obj.get_approval_status_display())
    approval_badge.short_description = 'Approval'
    approval_badge.admin_order_field = 'approval_status'

    actions = ['approve_items', 'reject_items']

    @admin.action(description='Approve selected items')
    def approve_items(self, request, queryset):
        count = queryset.update(approval_status=ApprovalStatus.APPROVED)
        self.message_user(request, f'Approved {count} item(s).')

    @admin.action(description='Reject selected items')
    def reject_items(self, request, queryset):
        count = queryset.update(approval_status=ApprovalStatus.REJECTED)
        self.message_user(request, f'Rejected {count} item(s).')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('created_by')


@admin.register(BundleDiscount)
class BundleDiscountAdmin(admin.ModelAdmin):
    list_display = ['min_items', 'discount_percentage', 'is_active', 'created_at']
    list_filter = ['is_active']
    ordering = ['min_items']
