from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from drf_spectacular.types import OpenApiTypes

from apps.entitlements.services import access_reason
from .models import CatalogItem
from .services import to_major


@extend_schema_field(OpenApiTypes.STR)
class MoneyField(serializers.Field):
    """Render an amount in satang as a 2-decimal THB string (``'135.00'``)."""

    def __init__(self, **kwargs):
        kwargs['read_only'] = True
        super().__init__(**kwargs)

    def to_representation(self, value):
        return str(to_major(value))


class CatalogItemSerializer(serializers.ModelSerializer):
    """Catalog item with the requesting user's access reason."""

    price = MoneyField(source='price_minor')
    is_free = serializers.BooleanField(read_only=True)
    seller = serializers.CharField(source='created_by.get_display_name', read_only=True)
    access_reason = serializers.SerializerMethodField()

    class Meta:
        model = CatalogItem
        fields = [
            'id',
            'title',
            'course_code',
            'description',
            'price',
            'is_free',
            'seller',
            'access_reason',
            'created_at',
        ]
        read_only_fields = fields

    def get_access_reason(self, obj) -> str:
        access_map = self.context.get('access')
        if access_map is not None and obj.pk in access_map:
            return access_map[obj.pk].reason
        request = self.context.get('request')
        user = request.user if request else None
        return access_reason(user=user, item=obj).reason


class CatalogItemMinimalSerializer(serializers.ModelSerializer):
    """Compact item info for nesting in cart entries and orders."""

    price = MoneyField(source='price_minor')

    class Meta:
        model = CatalogItem
        fields = ['id', 'title', 'course_code', 'price']
        read_only_fields = fields
