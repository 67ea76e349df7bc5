import pytest

from apps.cart.models import CartEntry


@pytest.fixture
def cart_with_two_items(db, buyer, item_a, item_b):
    """Buyer's cart holding item_a then item_b."""
    first = CartEntry.objects.create(user=buyer, catalog_item=item_a)
    second = CartEntry.objects.create(user=buyer, catalog_item=item_b)
    return [first, second]
