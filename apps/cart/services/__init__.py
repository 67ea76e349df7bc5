"""
Cart services - Business logic layer.
"""

from .cart_management import (
    CartContents,
    add_to_cart,
    remove_from_cart,
    clear_cart,
    get_cart,
    get_cart_count,
)

from .exceptions import (
    CartServiceError,
    ItemUnavailableError,
    AlreadyOwnedError,
    CartEntryNotFoundError,
)

__all__ = [
    'CartContents',
    'add_to_cart',
    'remove_from_cart',
    'clear_cart',
    'get_cart',
    'get_cart_count',
    # Exceptions
    'CartServiceError',
    'ItemUnavailableError',
    'AlreadyOwnedError',
    'CartEntryNotFoundError',
]
