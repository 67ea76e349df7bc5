from django.db import models
import uuid


class CartEntry(models.Model):
    """Catalog item a user intends to buy. Prices are read live, never stored."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='cart_entries'
    )
    catalog_item = models.ForeignKey(
        'catalog.CatalogItem',
        on_delete=models.CASCADE,
        related_name='cart_entries'
    )

    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cart_entries'
        verbose_name_plural = 'cart entries'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'catalog_item'],
                name='unique_cart_entry_per_user_item'
            ),
        ]
        ordering = ['added_at', 'id']

    def __str__(self):
        return f"{self.user} - {self.catalog_item}"
