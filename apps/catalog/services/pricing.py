"""
Pricing Engine
==============

Pure functions turning a list of item prices into an order quote.

All amounts are integers in minor units (satang). A quote for a single item
carries no discount; two or more items form a bundle and receive the
configured percentage off the subtotal.

Example:
    Two items at 100.00 and 50.00 THB with a 10% bundle discount::

        >>> quote = quote_prices([10000, 5000], bundle_percentage=Decimal('10'))
        >>> quote.subtotal, quote.discount, quote.total
        (Decimal('150.00'), Decimal('15.00'), Decimal('135.00'))
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from .exceptions import EmptyPriceListError, InvalidPriceError, InvalidDiscountError


DISCOUNT_NONE = 'none'
DISCOUNT_BUNDLE = 'bundle'

MINOR_UNITS = Decimal(100)


def to_major(amount_minor: int) -> Decimal:
    """Convert satang to a 2-decimal THB amount."""
    return (Decimal(amount_minor) / MINOR_UNITS).quantize(Decimal('0.01'))


def to_minor(amount: Decimal) -> int:
    """Convert a THB amount to satang, rounding half-up."""
    return int((Decimal(amount) * MINOR_UNITS).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PriceQuote:
    """Priced summary of an ordered set of items."""

    item_count: int
    subtotal_minor: int
    discount_kind: str
    discount_percentage: Decimal
    discount_minor: int
    total_minor: int

    @property
    def is_bundle(self):
        return self.discount_kind == DISCOUNT_BUNDLE

    @property
    def subtotal(self):
        return to_major(self.subtotal_minor)

    @property
    def discount(self):
        return to_major(self.discount_minor)

    @property
    def total(self):
        return to_major(self.total_minor)


def quote_prices(prices_minor: Sequence[int], *, bundle_percentage: Decimal) -> PriceQuote:
    """
    Price an ordered list of item prices.

    Algorithm:
        1. ``subtotal = sum(prices)``
        2. One item: no discount, ``total = subtotal``
        3. Two or more items: ``discount = round_half_up(subtotal * pct / 100)``
           in whole satang (i.e. 2 decimals of THB)
        4. ``total = max(0, subtotal - discount)``

    Args:
        prices_minor: Item prices in satang, in order. Not modified.
        bundle_percentage: Percentage applied to bundles (0-100).

    Returns:
        PriceQuote for the items.

    Raises:
        EmptyPriceListError: If no prices were given.
        InvalidPriceError: If a price is negative or not an integer.
        InvalidDiscountError: If the percentage is outside 0..100.
    """
    prices = tuple(prices_minor)
    if not prices:
        raise EmptyPriceListError("At least one item is required for pricing")

    for price in prices:
        if isinstance(price, bool) or not isinstance(price, int) or price < 0:
            raise InvalidPriceError(f"Invalid item price: {price!r}")

    subtotal = sum(prices)

    if len(prices) < 2:
        return PriceQuote(
            item_count=len(prices),
            subtotal_minor=subtotal,
            discount_kind=DISCOUNT_NONE,
            discount_percentage=Decimal('0'),
            discount_minor=0,
            total_minor=subtotal,
        )

    percentage = Decimal(bundle_percentage)
    if percentage < 0 or percentage > 100:
        raise InvalidDiscountError(
            f"Bundle discount must be between 0 and 100, got {percentage}"
        )

    discount = int(
        (Decimal(subtotal) * percentage / Decimal(100)).quantize(
            Decimal('1'), rounding=ROUND_HALF_UP
        )
    )
    total = max(0, subtotal - discount)

    return PriceQuote(
        item_count=len(prices),
        subtotal_minor=subtotal,
        discount_kind=DISCOUNT_BUNDLE,
        discount_percentage=percentage,
        discount_minor=discount,
        total_minor=total,
    )


def quote_items(items: Iterable, *, bundle_percentage: Decimal) -> PriceQuote:
    """Price catalog items using their current ``price_minor``."""
    return quote_prices(
        [item.price_minor for item in items],
        bundle_percentage=bundle_percentage,
    )
