"""
Orders services - Business logic layer.

This package contains:
- Order builder (checkout)
- Payment request generation (PromptPay QR)
- Reconciliation state machine (approve / reject)
- Order read helpers
"""

from .checkout import checkout

from .order_queries import (
    get_user_orders,
    get_order_for_user,
    get_pending_item_ids,
)

from .payment_requests import (
    request_payment,
    get_payment_request,
    get_qr_code_data_url,
)

from .promptpay import PromptPayPayloadGenerator

from .reconciliation import (
    is_payment_reviewer,
    approve_payment,
    reject_payment,
    get_pending_orders,
)

from .exceptions import (
    OrdersServiceError,
    EmptyCartError,
    CheckoutItemUnavailableError,
    ConflictAlreadyOwnedError,
    CartChangedError,
    OrderNotFoundError,
    OrderNotPendingError,
    PaymentAmountMismatchError,
    PaymentRequestNotFoundError,
    PromptPayConfigurationError,
    ForbiddenError,
    InvalidTransitionError,
    RejectionReasonRequiredError,
)

__all__ = [
    # Checkout
    'checkout',
    # Queries
    'get_user_orders',
    'get_order_for_user',
    'get_pending_item_ids',
    # Payment requests
    'request_payment',
    'get_payment_request',
    'get_qr_code_data_url',
    'PromptPayPayloadGenerator',
    # Reconciliation
    'is_payment_reviewer',
    'approve_payment',
    'reject_payment',
    'get_pending_orders',
    # Exceptions
    'OrdersServiceError',
    'EmptyCartError',
    'CheckoutItemUnavailableError',
    'ConflictAlreadyOwnedError',
    'CartChangedError',
    'OrderNotFoundError',
    'OrderNotPendingError',
    'PaymentAmountMismatchError',
    'PaymentRequestNotFoundError',
    'PromptPayConfigurationError',
    'ForbiddenError',
    'InvalidTransitionError',
    'RejectionReasonRequiredError',
]
