"""
Reconciliation state machine.

A human reviewer checks the bank statement and settles each pending order:

    pending --approve--> paid    (mints one Purchase per order item)
    pending --reject---> failed  (no entitlements)

``paid`` and ``failed`` are terminal. The transition is a conditional
UPDATE on ``payment_status='pending'``, so two reviewers racing on the same
order cannot both win.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.entitlements.models import Purchase
from apps.orders.models import Order, PaymentStatus
from .exceptions import (
    ConflictAlreadyOwnedError,
    ForbiddenError,
    InvalidTransitionError,
    OrderNotFoundError,
    RejectionReasonRequiredError,
)

logger = logging.getLogger(__name__)


def is_payment_reviewer(user) -> bool:
    return bool(user is not None and user.is_authenticated and user.is_payment_reviewer)


def _ensure_reviewer(reviewer):
    if not is_payment_reviewer(reviewer):
        raise ForbiddenError("Only payment reviewers can reconcile orders")


def _transition(*, order_id, reviewer, to_status, **fields) -> Order:
    """Move a pending order to ``to_status``; returns the refreshed order."""
    updated = Order.objects.filter(
        id=order_id,
        payment_status=PaymentStatus.PENDING,
    ).update(
        payment_status=to_status,
        reviewed_by=reviewer,
        reviewed_at=timezone.now(),
        updated_at=timezone.now(),
        **fields,
    )

    if not updated:
        try:
            order = Order.objects.get(id=order_id)
        except Order.DoesNotExist:
            raise OrderNotFoundError(f"Order {order_id} not found")
        raise InvalidTransitionError(
            f"Order {order_id} is already {order.payment_status}"
        )

    return Order.objects.select_related('user').get(id=order_id)


@transaction.atomic
def approve_payment(*, order_id, reviewer, bank_reference='') -> Order:
    """
    Mark a pending order paid and grant its items to the buyer.

    Args:
        order_id: Order UUID
        reviewer: Staff user confirming the transfer
        bank_reference: Optional transfer reference from the bank statement

    Returns:
        The paid Order

    Raises:
        ForbiddenError: If reviewer lacks the reviewer role
        OrderNotFoundError: If the order doesn't exist
        ConflictAlreadyOwnedError: If the buyer already owns an item; the
            order stays pending
        InvalidTransitionError: If the order is not pending (including
            repeated approval)
    """
    _ensure_reviewer(reviewer)

    order = _transition(
        order_id=order_id,
        reviewer=reviewer,
        to_status=PaymentStatus.PAID,
        bank_reference=(bank_reference or '').strip(),
    )

    item_ids = list(order.items.values_list('catalog_item_id', flat=True))
    owned = list(
        Purchase.objects
        .filter(user=order.user, catalog_item_id__in=item_ids)
        .select_related('catalog_item')
    )
    if owned:
        # Raising rolls back the status update with the rest of the transaction
        logger.warning(
            "Order %s not approved: buyer %s already owns %d item(s)",
            order.pk, order.user.pk, len(owned)
        )
        raise ConflictAlreadyOwnedError(
            "The buyer already owns some of these items",
            items=[
                {'id': str(p.catalog_item_id), 'title': p.catalog_item.title}
                for p in owned
            ],
        )

    try:
        Purchase.objects.bulk_create([
            Purchase(user=order.user, catalog_item_id=item_id, order=order)
            for item_id in item_ids
        ])
    except IntegrityError as e:
        # Entitlement granted concurrently by another order
        logger.error("Duplicate entitlement while approving order %s", order.pk)
        raise ConflictAlreadyOwnedError("The buyer already owns some of these items") from e

    logger.info(
        "Order %s approved by %s: %d purchase(s) granted to %s",
        order.pk, reviewer.pk, len(item_ids), order.user.pk
    )
    return order


@transaction.atomic
def reject_payment(*, order_id, reviewer, reason) -> Order:
    """
    Mark a pending order failed. No entitlements are granted; the buyer may
    check the same items out again.

    Raises:
        ForbiddenError: If reviewer lacks the reviewer role
        RejectionReasonRequiredError: If reason is blank
        OrderNotFoundError: If the order doesn't exist
        InvalidTransitionError: If the order is not pending
    """
    _ensure_reviewer(reviewer)

    reason = (reason or '').strip()
    if not reason:
        raise RejectionReasonRequiredError("A rejection reason is required")

    order = _transition(
        order_id=order_id,
        reviewer=reviewer,
        to_status=PaymentStatus.FAILED,
        rejection_reason=reason,
    )

    logger.info("Order %s rejected by %s: %s", order.pk, reviewer.pk, reason)
    return order


def get_pending_orders() -> QuerySet[Order]:
    """Reviewer queue: pending orders, oldest first."""
    return (
        Order.objects
        .filter(payment_status=PaymentStatus.PENDING)
        .select_related('user', 'payment_request')
        .prefetch_related('items__catalog_item')
        .order_by('created_at')
    )
