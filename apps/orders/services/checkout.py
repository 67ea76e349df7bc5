"""
Order builder.

Turns the user's cart into a pending order in one transaction. Either the
order is created with all its items and the cart is drained, or nothing
changes.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.cart.models import CartEntry
from apps.catalog.services import get_bundle_percentage, quote_items
from apps.entitlements.services import resolve_access
from apps.orders.models import Order, OrderItem, PaymentStatus
from .exceptions import (
    EmptyCartError,
    CheckoutItemUnavailableError,
    ConflictAlreadyOwnedError,
    CartChangedError,
)
from .order_queries import get_pending_item_ids

logger = logging.getLogger(__name__)


def _describe(items):
    return [{'id': str(item.pk), 'title': item.title} for item in items]


@transaction.atomic
def checkout(*, user) -> Order:
    """
    Create a pending order from the user's cart.

    Steps:
        1. Lock the user row so one user's checkouts run one at a time
        2. Snapshot cart entries in insertion order
        3. Reject unavailable items and items the user already owns
           (or has in a pending order)
        4. Price with current catalog prices and the bundle tier
        5. Persist order + items, delete exactly the snapshotted entries

    Args:
        user: User checking out

    Returns:
        The created Order (payment_status=pending)

    Raises:
        EmptyCartError: If the cart is empty
        CheckoutItemUnavailableError: If an item is inactive or unapproved
        ConflictAlreadyOwnedError: If the user already has access to an item
        CartChangedError: If the cart changed under the snapshot
    """
    User = get_user_model()
    User.objects.select_for_update().get(pk=user.pk)

    entries = list(
        CartEntry.objects
        .select_for_update()
        .filter(user=user)
        .select_related('catalog_item')
        .order_by('added_at', 'id')
    )
    if not entries:
        raise EmptyCartError("Your cart is empty")

    items = [entry.catalog_item for entry in entries]

    unavailable = [item for item in items if not item.is_purchasable]
    if unavailable:
        raise CheckoutItemUnavailableError(
            "Some items in your cart are no longer available",
            items=_describe(unavailable),
        )

    access = resolve_access(user=user, items=items)
    pending = get_pending_item_ids(user=user, item_ids=[item.pk for item in items])
    owned = [
        item for item in items
        if access[item.pk].has_access or item.pk in pending
    ]
    if owned:
        logger.warning(
            "Checkout conflict for user %s: %d item(s) already owned",
            user.pk, len(owned)
        )
        raise ConflictAlreadyOwnedError(
            "You already own or have a pending order for some items in your cart",
            items=_describe(owned),
        )

    quote = quote_items(items, bundle_percentage=get_bundle_percentage(len(items)))

    order = Order.objects.create(
        user=user,
        subtotal_minor=quote.subtotal_minor,
        discount_kind=quote.discount_kind,
        discount_percentage=quote.discount_percentage,
        discount_minor=quote.discount_minor,
        total_minor=quote.total_minor,
        payment_status=PaymentStatus.PENDING,
    )
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            catalog_item=item,
            position=position,
            unit_price_minor=item.price_minor,
        )
        for position, item in enumerate(items)
    ])

    deleted, _ = CartEntry.objects.filter(
        user=user,
        pk__in=[entry.pk for entry in entries],
    ).delete()
    if deleted != len(entries):
        raise CartChangedError("Your cart changed during checkout, please try again")

    logger.info(
        "Order %s created for user %s: %d item(s), total %s",
        order.pk, user.pk, len(items), order.total
    )
    return order
