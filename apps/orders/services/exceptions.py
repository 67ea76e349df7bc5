"""Domain exceptions for orders app."""


class OrdersServiceError(Exception):
    """Base exception for order and payment services."""
    code = 'validation_error'


class EmptyCartError(OrdersServiceError):
    """Checkout attempted with nothing in the cart."""
    code = 'empty_cart'


class ItemsErrorMixin:
    """Carries the catalog items that caused the failure."""

    def __init__(self, message, items=()):
        super().__init__(message)
        self.items = list(items)


class CheckoutItemUnavailableError(ItemsErrorMixin, OrdersServiceError):
    """Cart holds items that were deactivated or unapproved since adding."""
    code = 'item_unavailable'


class ConflictAlreadyOwnedError(ItemsErrorMixin, OrdersServiceError):
    """Cart holds items the user already owns or has in a pending order."""
    code = 'conflict_already_owned'


class CartChangedError(OrdersServiceError):
    """Cart was modified concurrently while checking out."""
    code = 'cart_changed'


class OrderNotFoundError(OrdersServiceError):
    """Order doesn't exist or isn't visible to the caller."""
    code = 'not_found'


class OrderNotPendingError(OrdersServiceError):
    """Payment can only be requested for pending orders."""
    code = 'order_not_pending'


class PaymentAmountMismatchError(OrdersServiceError):
    """Stored payment request amount differs from the order total."""
    code = 'payment_amount_mismatch'


class PromptPayConfigurationError(OrdersServiceError):
    """PROMPTPAY_ID is not a phone number, national id or e-wallet id."""
    code = 'payment_configuration_error'


class ForbiddenError(OrdersServiceError):
    """Caller is not allowed to reconcile payments."""
    code = 'forbidden'


class InvalidTransitionError(OrdersServiceError):
    """Order is no longer pending."""
    code = 'invalid_transition'


class RejectionReasonRequiredError(OrdersServiceError):
    """Rejecting a payment requires a non-blank reason."""
    code = 'validation_error'


class PaymentRequestNotFoundError(OrdersServiceError):
    """No payment request has been generated for the order yet."""
    code = 'not_found'
