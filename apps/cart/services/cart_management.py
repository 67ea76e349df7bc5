"""
Cart store.

A user's set of intended purchases. Entries hold no prices; summaries are
priced live through the pricing engine so the cart always reflects current
catalog prices and the current bundle tier.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from apps.cart.models import CartEntry
from apps.catalog.models import CatalogItem
from apps.catalog.services import PriceQuote, get_bundle_percentage, quote_items
from apps.entitlements.services import access_reason
from apps.orders.services.order_queries import get_pending_item_ids
from .exceptions import AlreadyOwnedError, CartEntryNotFoundError, ItemUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class CartContents:
    """Cart entries in insertion order plus the priced summary."""

    entries: list = field(default_factory=list)
    quote: Optional[PriceQuote] = None

    @property
    def available_entries(self):
        return [e for e in self.entries if e.catalog_item.is_purchasable]

    @property
    def count(self):
        return len(self.entries)


def _cart_entries(user):
    return (
        CartEntry.objects
        .filter(user=user)
        .select_related('catalog_item')
        .order_by('added_at', 'id')
    )


def add_to_cart(*, user, catalog_item_id: UUID) -> tuple[CartEntry, bool]:
    """
    Add a catalog item to the user's cart.

    Args:
        user: Cart owner
        catalog_item_id: Item to add

    Returns:
        Tuple of (entry, created). ``created`` is False when the item was
        already in the cart.

    Raises:
        ItemUnavailableError: If the item doesn't exist or can't be bought
        AlreadyOwnedError: If the user already has access to the item, or
            it is part of their pending order
    """
    try:
        item = CatalogItem.objects.get(id=catalog_item_id)
    except CatalogItem.DoesNotExist:
        raise ItemUnavailableError("This cheat sheet does not exist")

    if not item.is_purchasable:
        raise ItemUnavailableError("This cheat sheet is not available for purchase")

    access = access_reason(user=user, item=item)
    if access.has_access:
        raise AlreadyOwnedError(f"You already have access to this cheat sheet ({access.reason})")

    if get_pending_item_ids(user=user, item_ids=[item.pk]):
        raise AlreadyOwnedError("This cheat sheet is in an order awaiting payment review")

    existing = CartEntry.objects.filter(user=user, catalog_item=item).first()
    if existing:
        return existing, False

    try:
        with transaction.atomic():
            entry = CartEntry.objects.create(user=user, catalog_item=item)
    except IntegrityError:
        # Concurrent add of the same item
        return CartEntry.objects.get(user=user, catalog_item=item), False

    logger.info("User %s added item %s to cart", user.pk, item.pk)
    return entry, True


def remove_from_cart(*, user, entry_id: UUID) -> None:
    """
    Remove one entry from the user's cart.

    Raises:
        CartEntryNotFoundError: If the entry doesn't exist or isn't the user's
    """
    deleted, _ = CartEntry.objects.filter(id=entry_id, user=user).delete()
    if not deleted:
        raise CartEntryNotFoundError("Cart item not found")


def clear_cart(*, user) -> int:
    """Remove every entry; returns how many were removed."""
    deleted, _ = CartEntry.objects.filter(user=user).delete()
    return deleted


def get_cart(*, user) -> CartContents:
    """
    Cart entries with a live price summary.

    Entries whose item was deactivated stay listed so the user can see and
    remove them, but they are left out of the summary.
    """
    contents = CartContents(entries=list(_cart_entries(user)))

    items = [e.catalog_item for e in contents.available_entries]
    if items:
        contents.quote = quote_items(
            items,
            bundle_percentage=get_bundle_percentage(len(items)),
        )
    return contents


def get_cart_count(*, user) -> int:
    return CartEntry.objects.filter(user=user).count()
