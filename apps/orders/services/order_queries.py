"""Read helpers for orders."""

from typing import Iterable, Optional
from uuid import UUID

from django.db.models import QuerySet

from apps.orders.models import Order, OrderItem, PaymentStatus
from .exceptions import OrderNotFoundError


def get_user_orders(*, user) -> QuerySet[Order]:
    """User's orders, newest first, with items prefetched."""
    return (
        Order.objects
        .filter(user=user)
        .prefetch_related('items__catalog_item')
        .order_by('-created_at')
    )


def get_order_for_user(*, order_id: UUID, user) -> Order:
    """
    Fetch an order owned by ``user``.

    Raises:
        OrderNotFoundError: If the order doesn't exist or belongs to
            someone else
    """
    try:
        return get_user_orders(user=user).get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")


def get_pending_item_ids(*, user, item_ids: Optional[Iterable[UUID]] = None) -> set:
    """
    Catalog item ids sitting in the user's pending orders.

    Those items cannot be added to the cart or checked out again until
    the order is rejected.
    """
    queryset = OrderItem.objects.filter(
        order__user=user,
        order__payment_status=PaymentStatus.PENDING,
    )
    if item_ids is not None:
        queryset = queryset.filter(catalog_item_id__in=list(item_ids))
    return set(queryset.values_list('catalog_item_id', flat=True))
