"""
Catalog services - Business logic layer.

This package contains:
- Pricing engine (pure quote computation)
- Bundle discount lookup
- Catalog read helpers
"""

from .pricing import (
    DISCOUNT_NONE,
    DISCOUNT_BUNDLE,
    PriceQuote,
    quote_prices,
    quote_items,
    to_major,
    to_minor,
)

from .discounts import get_bundle_percentage

from .catalog_queries import (
    get_visible_items,
    get_item_by_id,
)

from .exceptions import (
    CatalogServiceError,
    CatalogItemNotFoundError,
    EmptyPriceListError,
    InvalidPriceError,
    InvalidDiscountError,
)

__all__ = [
    # Pricing
    'DISCOUNT_NONE',
    'DISCOUNT_BUNDLE',
    'PriceQuote',
    'quote_prices',
    'quote_items',
    'to_major',
    'to_minor',
    # Discounts
    'get_bundle_percentage',
    # Queries
    'get_visible_items',
    'get_item_by_id',
    # Exceptions
    'CatalogServiceError',
    'CatalogItemNotFoundError',
    'EmptyPriceListError',
    'InvalidPriceError',
    'InvalidDiscountError',
]
