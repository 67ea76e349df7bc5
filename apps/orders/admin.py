from django.contrib import admin, messages
from django.utils.html import format_html
from .models import Order, OrderItem, PaymentRequest, PaymentStatus
from .services import (
    approve_payment,
    reject_payment,
    ConflictAlreadyOwnedError,
    ForbiddenError,
    InvalidTransitionError,
)


BADGE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


class OrderItemInline(admin.TabularInline):
    """Inline admin for order items within an order."""
    model = OrderItem
    extra = 0
    fields = ['position', 'catalog_item', 'unit_price_minor']
    readonly_fields = fields
    ordering = ['position']

    def has_add_permission(self, request, obj=None):
        """Items are created by checkout."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class PaymentRequestInline(admin.StackedInline):
    model = PaymentRequest
    extra = 0
    fields = ['payment_reference', 'amount_minor', 'payload', 'created_at', 'updated_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for orders.

    Orders are never edited or deleted here. Approve / reject actions go
    through the reconciliation service so purchases are minted exactly once.
    """

    list_display = [
        'get_short_id',
        'user',
        'get_total_display',
        'discount_kind',
        'status_badge',
        'get_payment_reference',
        'reviewed_by',
        'created_at',
    ]

    list_filter = [
        'payment_status',
        'discount_kind',
        'created_at',
    ]

    search_fields = [
        'id',
        'user__email',
        'user__display_name',
        'payment_request__payment_reference',
        'bank_reference',
    ]

    readonly_fields = [
        'user',
        'subtotal_minor',
        'discount_kind',
        'discount_percentage',
        'discount_minor',
        'total_minor',
        'currency',
        'payment_status',
        'reviewed_by',
        'reviewed_at',
        'rejection_reason',
        'bank_reference',
        'created_at',
        'updated_at',
    ]

    inlines = [OrderItemInline, PaymentRequestInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_short_id(self, obj):
        return str(obj.id)[:8].upper()
    get_short_id.short_description = 'Order'

    def get_total_display(self, obj):
        return f"{obj.total:.2f} {obj.currency}"
    get_total_display.short_description = 'Total'
    get_total_display.admin_order_field = 'total_minor'

    def get_payment_reference(self, obj):
        try:
            return obj.payment_request.payment_reference
        except PaymentRequest.DoesNotExist:
            return '-'
    get_payment_reference.short_description = 'Reference'

    def status_badge(self, obj):
        """Display payment status as colored badge."""
        colors = {
            PaymentStatus.PENDING: ('#E5C49A', '#2C1810'),
            PaymentStatus.PAID: ('#6B8E5E', 'white'),
            PaymentStatus.FAILED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.payment_status, ('#ccc', '#666'))
        return format_html(BADGE, bg, fg, obj.get_payment_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'payment_status'

    actions = ['approve_selected', 'reject_selected']

    def _reconcile(self, request, queryset, decide, verb):
        done = 0
        for order in queryset.filter(payment_status=PaymentStatus.PENDING):
            try:
                decide(order)
                done += 1
            except (ConflictAlreadyOwnedError, ForbiddenError, InvalidTransitionError) as e:
                self.message_user(request, f'Order {str(order.id)[:8]}: {e}', level=messages.WARNING)
        self.message_user(request, f'{verb} {done} order(s).')

    @admin.action(description='Approve payment for selected orders')
    def approve_selected(self, request, queryset):
        self._reconcile(
            request, queryset,
            lambda order: approve_payment(order_id=order.id, reviewer=request.user),
            'Approved',
        )

    @admin.action(description='Reject payment for selected orders')
    def reject_selected(self, request, queryset):
        self._reconcile(
            request, queryset,
            lambda order: reject_payment(order_id=order.id, reviewer=request.user, reason='Rejected by admin'),
            'Rejected',
        )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'reviewed_by', 'payment_request')
