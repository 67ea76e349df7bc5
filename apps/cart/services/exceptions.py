"""Domain exceptions for cart app."""


class CartServiceError(Exception):
    """Base exception for cart services."""
    code = 'validation_error'


class ItemUnavailableError(CartServiceError):
    """Item doesn't exist, is inactive or isn't approved."""
    code = 'item_unavailable'


class AlreadyOwnedError(CartServiceError):
    """User already has access to the item or it is in a pending order."""
    code = 'already_owned'


class CartEntryNotFoundError(CartServiceError):
    """Entry doesn't exist or belongs to another user."""
    code = 'not_found'
