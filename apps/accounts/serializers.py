from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Profile of the current user, including marketplace roles."""

    is_payment_reviewer = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'email_verified',
            'is_staff',
            'is_seller',
            'is_payment_reviewer',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields
