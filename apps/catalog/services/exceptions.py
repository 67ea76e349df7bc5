"""Domain exceptions for catalog app."""


class CatalogServiceError(Exception):
    """Base exception for all catalog service errors."""
    code = 'validation_error'


class CatalogItemNotFoundError(CatalogServiceError):
    """Catalog item does not exist or is not visible."""
    code = 'not_found'


class EmptyPriceListError(CatalogServiceError):
    """Pricing needs at least one item."""
    pass


class InvalidPriceError(CatalogServiceError):
    """Item price is negative or not a whole number of minor units."""
    pass


class InvalidDiscountError(CatalogServiceError):
    """Discount percentage outside 0..100."""
    pass
