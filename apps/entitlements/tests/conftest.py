import pytest

from apps.cart.models import CartEntry
from apps.orders.services import approve_payment, checkout


@pytest.fixture
def paid_order(db, buyer, reviewer, item_a):
    """Approved order granting item_a to buyer."""
    CartEntry.objects.create(user=buyer, catalog_item=item_a)
    order = checkout(user=buyer)
    return approve_payment(order_id=order.id, reviewer=reviewer)


@pytest.fixture
def media_root(settings, tmp_path):
    """Point the default storage at a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path
