"""Bundle discount configuration lookup."""

from decimal import Decimal

from django.conf import settings

from apps.catalog.models import BundleDiscount


def get_bundle_percentage(item_count: int) -> Decimal:
    """
    Resolve the bundle discount percentage for an order of ``item_count`` items.

    Returns 0 for fewer than two items. Otherwise the active tier with the
    largest ``min_items <= item_count`` wins, falling back to the
    ``BUNDLE_DISCOUNT_PERCENTAGE`` setting.
    """
    if item_count < 2:
        return Decimal('0')

    tier = (
        BundleDiscount.objects
        .filter(is_active=True, min_items__lte=item_count)
        .order_by('-min_items')
        .first()
    )
    if tier is not None:
        return tier.discount_percentage

    return Decimal(settings.BUNDLE_DISCOUNT_PERCENTAGE)
