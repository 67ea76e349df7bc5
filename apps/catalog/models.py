from decimal import Decimal
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
import uuid


class ApprovalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending review'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class CatalogItem(models.Model):
    """
    A purchasable cheat sheet.

    Prices are stored in minor units (satang). Orders copy the price at
    checkout, so editing ``price_minor`` never touches existing orders.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=200)
    course_code = models.CharField(max_length=20, db_index=True)
    description = models.TextField(blank=True)

    price_minor = models.PositiveIntegerField(
        default=0,
        help_text='Price in satang (1 THB = 100 satang). 0 means free.'
    )

    # Moderation
    is_active = models.BooleanField(default=True)
    approval_status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING
    )

    # Uploader (seller or admin)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='catalog_items'
    )

    # Opaque key in the default storage backend
    file_path = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'catalog_items'
        indexes = [
            models.Index(fields=['is_active', 'approval_status'], name='catalog_visible_idx'),
            models.Index(fields=['created_by'], name='catalog_created_by_idx'),
        ]
        ordering = ['course_code', 'title']

    def __str__(self):
        return f"{self.course_code} - {self.title}"

    @property
    def price(self):
        return Decimal(self.price_minor) / Decimal(100)

    @property
    def is_free(self):
        return self.price_minor == 0

    @property
    def is_purchasable(self):
        """Active and approved by moderation."""
        return self.is_active and self.approval_status == ApprovalStatus.APPROVED


class BundleDiscount(models.Model):
    """
    Bundle discount tier.

    The tier with the largest ``min_items`` not exceeding the number of
    ordered items applies. Without a matching tier the
    ``BUNDLE_DISCOUNT_PERCENTAGE`` setting is used.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    min_items = models.PositiveIntegerField(
        validators=[MinValueValidator(2)],
        help_text='Minimum number of items in the order for this tier.'
    )
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'bundle_discounts'
        ordering = ['min_items']

    def __str__(self):
        return f"{self.min_items}+ items: {self.discount_percentage}%"
