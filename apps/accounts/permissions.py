from rest_framework.permissions import BasePermission


class IsVerifiedUser(BasePermission):
    """
    Permission: authenticated user whose identity provider verified the
    email domain.
    """

    message = 'Only users with a verified email domain can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.email_verified)
