# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


BADGE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for marketplace users.

    Staff flag grants payment review rights; seller flag is managed by the
    seller onboarding flow.
    """

    list_display = [
        'email',
        'display_name',
        'is_active_badge',
        'role_badge',
        'email_verified_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_seller',
        'is_superuser',
        'email_verified',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Roles', {
            'fields': ('is_active', 'is_staff', 'is_seller', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Verification', {
            'fields': ('email_verified',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
        ('Roles', {
            'fields': ('is_active', 'is_staff', 'is_seller', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(BADGE, '#6B8E5E', 'white', 'Active')
        return format_html(BADGE, '#B85C5C', 'white', 'Inactive')
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def role_badge(self, obj):
        """Display reviewer / seller / buyer role."""
        if obj.is_payment_reviewer:
            return format_html(BADGE, '#A47449', 'white', 'Reviewer')
        if obj.is_seller:
            return format_html(BADGE, '#5E7E8E', 'white', 'Seller')
        return format_html(BADGE, '#ccc', '#666', 'Buyer')
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'is_staff'

    def email_verified_badge(self, obj):
        """Display email domain verification as colored badge."""
        if obj.email_verified:
            return format_html(BADGE, '#6B8E5E', 'white', 'Verified')
        return format_html(BADGE, '#E5C49A', '#2C1810', 'Unverified')
    email_verified_badge.short_description = 'Email'
    email_verified_badge.admin_order_field = 'email_verified'

    actions = [
        'activate_users',
        'deactivate_users',
        'grant_reviewer_role',
        'revoke_reviewer_role',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        """Activate selected users."""
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers for safety)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Grant payment reviewer role')
    def grant_reviewer_role(self, request, queryset):
        count = queryset.update(is_staff=True)
        self.message_user(request, f'Granted reviewer role to {count} user(s).')

    @admin.action(description='Revoke payment reviewer role')
    def revoke_reviewer_role(self, request, queryset):
        count = queryset.filter(is_superuser=False).update(is_staff=False)
        self.message_user(request, f'Revoked reviewer role from {count} user(s).')
