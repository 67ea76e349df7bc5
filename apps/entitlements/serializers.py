from rest_framework import serializers

from apps.catalog.serializers import CatalogItemMinimalSerializer
from .models import AccessReason, Purchase


class PurchaseSerializer(serializers.ModelSerializer):
    """Owned cheat sheet ("My purchases")."""

    catalog_item = CatalogItemMinimalSerializer(read_only=True)
    order_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Purchase
        fields = ['id', 'catalog_item', 'order_id', 'granted_at']
        read_only_fields = fields


class AccessCheckSerializer(serializers.Serializer):
    """Access decision for one item."""

    item_id = serializers.UUIDField()
    has_access = serializers.BooleanField()
    reason = serializers.ChoiceField(choices=AccessReason.choices)
    order_id = serializers.UUIDField(allow_null=True)
    can_review = serializers.BooleanField()
