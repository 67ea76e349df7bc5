"""
Payment request generator.

Issues the PromptPay instruction a buyer pays against. The request is
idempotent per order: the first call fixes the amount and reference, later
calls return the same request.
"""

import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from apps.orders.models import Order, PaymentRequest, PaymentStatus
from .exceptions import (
    OrderNotFoundError,
    OrderNotPendingError,
    PaymentAmountMismatchError,
    PaymentRequestNotFoundError,
)
from .promptpay import PromptPayPayloadGenerator

logger = logging.getLogger(__name__)

REFERENCE_ATTEMPTS = 5


def _encode(payment_request):
    return PromptPayPayloadGenerator.generate_payload(
        promptpay_id=settings.PROMPTPAY_ID,
        amount=payment_request.amount,
        reference=payment_request.payment_reference,
    )


def _create_payment_request(order):
    for attempt in range(REFERENCE_ATTEMPTS):
        payment_request = PaymentRequest(order=order, amount_minor=order.total_minor)
        payment_request.payment_reference = payment_request._generate_payment_reference()
        payment_request.payload = _encode(payment_request)
        try:
            with transaction.atomic():
                payment_request.save()
            return payment_request
        except IntegrityError:
            # Reference collision; retry with a fresh suffix
            logger.warning(
                "Payment reference collision for order %s (attempt %d)",
                order.pk, attempt + 1
            )
    raise IntegrityError(f"Could not allocate a payment reference for order {order.pk}")


@transaction.atomic
def request_payment(*, order_id, user) -> tuple[PaymentRequest, bool]:
    """
    Get or create the payment request for a pending order.

    Args:
        order_id: Order UUID
        user: Order owner

    Returns:
        Tuple of (payment_request, created)

    Raises:
        OrderNotFoundError: If the order doesn't exist or isn't the user's
        OrderNotPendingError: If the order is already paid or failed
        PaymentAmountMismatchError: If a stored request disagrees with the
            order total
        PromptPayConfigurationError: If PROMPTPAY_ID is invalid
    """
    try:
        order = Order.objects.select_for_update().get(id=order_id, user=user)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")

    if order.payment_status != PaymentStatus.PENDING:
        raise OrderNotPendingError(
            f"Order is {order.payment_status}; payment can only be requested for pending orders"
        )

    payment_request = PaymentRequest.objects.filter(order=order).first()
    if payment_request is not None:
        if payment_request.amount_minor != order.total_minor:
            raise PaymentAmountMismatchError(
                f"Payment request {payment_request.payment_reference} amount "
                f"{payment_request.amount} differs from order total {order.total}"
            )
        payload = _encode(payment_request)
        if payload != payment_request.payload:
            # Receiving PromptPay id changed since the request was issued
            payment_request.payload = payload
            payment_request.save(update_fields=['payload', 'updated_at'])
            logger.info("Payment request %s re-encoded", payment_request.payment_reference)
        return payment_request, False

    payment_request = _create_payment_request(order)
    logger.info(
        "Payment request %s issued for order %s: %s THB",
        payment_request.payment_reference, order.pk, payment_request.amount
    )
    return payment_request, True


def get_payment_request(*, order_id, user) -> PaymentRequest:
    """
    Fetch the existing payment request for one of the user's orders.

    Raises:
        OrderNotFoundError: If the order doesn't exist or isn't the user's
        PaymentRequestNotFoundError: If no request was generated yet
    """
    if not Order.objects.filter(id=order_id, user=user).exists():
        raise OrderNotFoundError(f"Order {order_id} not found")
    try:
        return PaymentRequest.objects.select_related('order').get(order_id=order_id)
    except PaymentRequest.DoesNotExist:
        raise PaymentRequestNotFoundError("No payment request has been generated for this order")


def get_qr_code_data_url(payment_request: PaymentRequest) -> str:
    return PromptPayPayloadGenerator.generate_qr_data_url(payment_request.payload)
