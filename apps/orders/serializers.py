from typing import Optional

from rest_framework import serializers

from apps.catalog.serializers import CatalogItemMinimalSerializer, MoneyField
from .models import Order, OrderItem, PaymentRequest
from .services import get_qr_code_data_url


# =============================================================================
# Input Serializers
# =============================================================================

class ApprovePaymentInputSerializer(serializers.Serializer):
    """
    Validate input for approving a payment.

    Fields:
        bank_reference (str): Optional transfer reference from the bank statement
    """

    bank_reference = serializers.CharField(max_length=100, required=False, allow_blank=True)


class RejectPaymentInputSerializer(serializers.Serializer):
    """
    Validate input for rejecting a payment.

    Fields:
        reason (str): Why the transfer could not be matched
    """

    reason = serializers.CharField(max_length=1000)


# =============================================================================
# Output Serializers
# =============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    catalog_item = CatalogItemMinimalSerializer(read_only=True)
    unit_price = MoneyField(source='unit_price_minor')

    class Meta:
        model = OrderItem
        fields = ['id', 'catalog_item', 'position', 'unit_price']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with frozen pricing and review outcome."""

    items = OrderItemSerializer(many=True, read_only=True)
    subtotal = MoneyField(source='subtotal_minor')
    discount = MoneyField(source='discount_minor')
    total = MoneyField(source='total_minor')
    is_bundle = serializers.BooleanField(read_only=True)
    buyer_email = serializers.EmailField(source='user.email', read_only=True)
    payment_reference = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'buyer_email',
            'items',
            'subtotal',
            'discount_kind',
            'discount_percentage',
            'discount',
            'total',
            'currency',
            'is_bundle',
            'payment_status',
            'payment_reference',
            'reviewed_at',
            'rejection_reason',
            'bank_reference',
            'created_at',
        ]
        read_only_fields = fields

    def get_payment_reference(self, obj) -> Optional[str]:
        try:
            return obj.payment_request.payment_reference
        except PaymentRequest.DoesNotExist:
            return None


class PaymentRequestSerializer(serializers.ModelSerializer):
    """Payment instruction with the QR code as a PNG data URL."""

    order_id = serializers.UUIDField(read_only=True)
    amount = MoneyField(source='amount_minor')
    currency = serializers.CharField(source='order.currency', read_only=True)
    qr_code = serializers.SerializerMethodField()

    class Meta:
        model = PaymentRequest
        fields = [
            'id',
            'order_id',
            'amount',
            'currency',
            'payment_reference',
            'payload',
            'qr_code',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_qr_code(self, obj) -> str:
        return get_qr_code_data_url(obj)
