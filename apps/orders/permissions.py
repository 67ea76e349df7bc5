"""
Custom permission classes for orders app.
"""
from rest_framework.permissions import BasePermission


class IsPaymentReviewer(BasePermission):
    """
    Permission for staff who reconcile bank transfers against orders.

    Usage:
        @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsPaymentReviewer])
        def approve(self, request, pk=None):
            ...
    """

    message = 'Only payment reviewers can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_payment_reviewer)


class IsOrderOwner(BasePermission):
    """Object permission: the order belongs to the requesting user."""

    message = 'You do not have permission to view this order.'

    def has_object_permission(self, request, view, obj):
        return obj.user_id == request.user.pk
