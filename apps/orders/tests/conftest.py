import pytest

from apps.cart.models import CartEntry
from apps.orders.services import checkout


@pytest.fixture
def filled_cart(db, buyer, item_a, item_b):
    """Buyer's cart holding item_a (100.00) then item_b (50.00)."""
    CartEntry.objects.create(user=buyer, catalog_item=item_a)
    CartEntry.objects.create(user=buyer, catalog_item=item_b)
    return buyer


@pytest.fixture
def pending_order(filled_cart, settings):
    """Bundle order for item_a + item_b at 10% off."""
    settings.BUNDLE_DISCOUNT_PERCENTAGE = 10
    return checkout(user=filled_cart)


@pytest.fixture
def single_order(db, buyer, item_a):
    """Pending single-item order."""
    CartEntry.objects.create(user=buyer, catalog_item=item_a)
    return checkout(user=buyer)
