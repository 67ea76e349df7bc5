from rest_framework import serializers

from apps.catalog.serializers import CatalogItemMinimalSerializer, MoneyField
from .models import CartEntry


# =============================================================================
# Input Serializers
# =============================================================================

class AddToCartInputSerializer(serializers.Serializer):
    """Validate input for adding an item to the cart."""

    catalog_item_id = serializers.UUIDField()


# =============================================================================
# Output Serializers
# =============================================================================

class CartEntrySerializer(serializers.ModelSerializer):
    """Cart entry with live item info."""

    catalog_item = CatalogItemMinimalSerializer(read_only=True)
    is_available = serializers.BooleanField(source='catalog_item.is_purchasable', read_only=True)

    class Meta:
        model = CartEntry
        fields = ['id', 'catalog_item', 'is_available', 'added_at']
        read_only_fields = fields


class CartSummarySerializer(serializers.Serializer):
    """Priced summary of the available cart entries."""

    item_count = serializers.IntegerField()
    subtotal = MoneyField(source='subtotal_minor')
    discount_kind = serializers.CharField()
    discount_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    discount = MoneyField(source='discount_minor')
    total = MoneyField(source='total_minor')
    is_bundle = serializers.BooleanField()


class CartSerializer(serializers.Serializer):
    """Full cart: entries in insertion order plus summary."""

    entries = CartEntrySerializer(many=True)
    count = serializers.IntegerField()
    summary = CartSummarySerializer(source='quote', allow_null=True)
