from django.db import models
import uuid


class Purchase(models.Model):
    """
    Durable entitlement to a catalog item.

    Rows are minted only when a reviewer approves the owning order and are
    never updated or deleted afterwards. Free items grant access without a
    row.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='purchases'
    )
    catalog_item = models.ForeignKey(
        'catalog.CatalogItem',
        on_delete=models.PROTECT,
        related_name='purchases'
    )
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.PROTECT,
        related_name='purchases'
    )

    granted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'purchases'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'catalog_item'],
                name='unique_purchase_per_user_item'
            ),
            models.UniqueConstraint(
                fields=['order', 'catalog_item'],
                name='unique_purchase_per_order_item'
            ),
        ]
        ordering = ['-granted_at']

    def __str__(self):
        return f"{self.user} owns {self.catalog_item}"


class AccessReason(models.TextChoices):
    PURCHASED = 'purchased', 'Purchased'
    OWNER = 'owner', 'Owner'
    FREE = 'free', 'Free'
    NONE = 'none', 'No access'
