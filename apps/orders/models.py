from decimal import Decimal
from django.db import models
import uuid

from apps.catalog.services.pricing import to_major


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'
    FAILED = 'failed', 'Failed'


class DiscountKind(models.TextChoices):
    NONE = 'none', 'No discount'
    BUNDLE = 'bundle', 'Bundle discount'


class Order(models.Model):
    """
    Immutable record of a checkout.

    Amounts are frozen in satang at checkout time. Only ``payment_status``
    and the review fields change afterwards, and only through the
    reconciliation service.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='orders'
    )

    # Pricing snapshot
    subtotal_minor = models.PositiveIntegerField()
    discount_kind = models.CharField(
        max_length=10,
        choices=DiscountKind.choices,
        default=DiscountKind.NONE
    )
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0')
    )
    discount_minor = models.PositiveIntegerField(default=0)
    total_minor = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default='THB')

    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )

    # Review outcome
    reviewed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='reviewed_orders'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    bank_reference = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='orders_user_created_idx'),
            models.Index(fields=['payment_status', 'created_at'], name='orders_status_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {str(self.id)[:8]} - {self.total} {self.currency} ({self.payment_status})"

    @property
    def is_bundle(self):
        return self.discount_kind == DiscountKind.BUNDLE

    @property
    def is_pending(self):
        return self.payment_status == PaymentStatus.PENDING

    @property
    def subtotal(self):
        return to_major(self.subtotal_minor)

    @property
    def discount(self):
        return to_major(self.discount_minor)

    @property
    def total(self):
        return to_major(self.total_minor)


class OrderItem(models.Model):
    """Catalog item in an order, priced as it was at checkout."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.PROTECT,
        related_name='items'
    )
    catalog_item = models.ForeignKey(
        'catalog.CatalogItem',
        on_delete=models.PROTECT,
        related_name='order_items'
    )

    # Cart insertion order
    position = models.PositiveIntegerField(default=0)
    unit_price_minor = models.PositiveIntegerField()

    class Meta:
        db_table = 'order_items'
        constraints = [
            models.UniqueConstraint(
                fields=['order', 'catalog_item'],
                name='unique_order_item'
            ),
        ]
        ordering = ['order', 'position']

    def __str__(self):
        return f"{self.catalog_item} @ {self.unit_price}"

    @property
    def unit_price(self):
        return to_major(self.unit_price_minor)


class PaymentRequest(models.Model):
    """
    PromptPay payment instruction for a pending order.

    One per order. The amount and reference are fixed on first generation;
    the payload may be re-encoded if the receiving PromptPay id changes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.OneToOneField(
        Order,
        on_delete=models.PROTECT,
        related_name='payment_request'
    )

    amount_minor = models.PositiveIntegerField()

    # Unique reference for matching bank transfers
    payment_reference = models.CharField(
        max_length=64,
        unique=True,
        editable=False
    )

    # EMVCo PromptPay payload encoded in the QR code
    payload = models.CharField(max_length=512)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_requests'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.payment_reference} - {self.amount} THB"

    def save(self, *args, **kwargs):
        """Generate payment reference if not set."""
        if not self.payment_reference:
            self.payment_reference = self._generate_payment_reference()
        super().save(*args, **kwargs)

    def _generate_payment_reference(self):
        """Generate reference for bank matching."""
        import secrets
        # Format: CS-<short-order-id>-<4-digit-random>
        short_id = str(self.order_id)[:8].upper()
        random_suffix = secrets.randbelow(10000)
        return f"CS-{short_id}-{random_suffix:04d}"

    @property
    def amount(self):
        return to_major(self.amount_minor)
