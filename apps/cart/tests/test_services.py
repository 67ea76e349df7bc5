import pytest
import uuid
from decimal import Decimal
from unittest import mock

from apps.cart.models import CartEntry
from apps.cart.services import (
    AlreadyOwnedError,
    CartEntryNotFoundError,
    ItemUnavailableError,
    add_to_cart,
    clear_cart,
    get_cart,
    get_cart_count,
    remove_from_cart,
)
from apps.catalog.models import ApprovalStatus
from apps.orders.services import approve_payment, checkout


@pytest.mark.django_db
class TestAddToCart:
    """Tests for add_to_cart()"""

    def test_add_creates_entry(self, buyer, item_a):
        entry, created = add_to_cart(user=buyer, catalog_item_id=item_a.id)

        assert created is True
        assert entry.catalog_item == item_a
        assert get_cart_count(user=buyer) == 1

    def test_add_twice_is_idempotent(self, buyer, item_a):
        """Second add returns the existing entry."""
        first, _ = add_to_cart(user=buyer, catalog_item_id=item_a.id)
        second, created = add_to_cart(user=buyer, catalog_item_id=item_a.id)

        assert created is False
        assert second.id == first.id
        assert CartEntry.objects.filter(user=buyer).count() == 1

    def test_concurrent_add_keeps_one_entry(self, buyer, item_a):
        """A racing add that loses on the unique constraint reuses the winner's entry."""
        first, _ = add_to_cart(user=buyer, catalog_item_id=item_a.id)

        with mock.patch('django.db.models.query.QuerySet.first', return_value=None):
            second, created = add_to_cart(user=buyer, catalog_item_id=item_a.id)

        assert created is False
        assert second.pk == first.pk
        assert CartEntry.objects.filter(user=buyer, catalog_item=item_a).count() == 1

    def test_unknown_item_unavailable(self, buyer):
        with pytest.raises(ItemUnavailableError):
            add_to_cart(user=buyer, catalog_item_id=uuid.uuid4())

    def test_inactive_item_unavailable(self, buyer, make_item):
        item = make_item(is_active=False)

        with pytest.raises(ItemUnavailableError):
            add_to_cart(user=buyer, catalog_item_id=item.id)

    def test_unapproved_item_unavailable(self, buyer, make_item):
        item = make_item(approval_status=ApprovalStatus.PENDING)

        with pytest.raises(ItemUnavailableError):
            add_to_cart(user=buyer, catalog_item_id=item.id)

    def test_free_item_already_owned(self, buyer, free_item):
        """Free items are accessible without buying."""
        with pytest.raises(AlreadyOwnedError):
            add_to_cart(user=buyer, catalog_item_id=free_item.id)

    def test_own_item_already_owned(self, seller, item_a):
        with pytest.raises(AlreadyOwnedError):
            add_to_cart(user=seller, catalog_item_id=item_a.id)

    def test_purchased_item_already_owned(self, buyer, reviewer, item_a):
        add_to_cart(user=buyer, catalog_item_id=item_a.id)
        order = checkout(user=buyer)
        approve_payment(order_id=order.id, reviewer=reviewer)

        with pytest.raises(AlreadyOwnedError):
            add_to_cart(user=buyer, catalog_item_id=item_a.id)

    def test_pending_order_item_already_owned(self, buyer, item_a):
        """Items awaiting payment review can't be re-added."""
        add_to_cart(user=buyer, catalog_item_id=item_a.id)
        checkout(user=buyer)

        with pytest.raises(AlreadyOwnedError):
            add_to_cart(user=buyer, catalog_item_id=item_a.id)

    def test_other_users_purchase_does_not_block(self, buyer, other_buyer, reviewer, item_a):
        add_to_cart(user=other_buyer, catalog_item_id=item_a.id)
        order = checkout(user=other_buyer)
        approve_payment(order_id=order.id, reviewer=reviewer)

        _, created = add_to_cart(user=buyer, catalog_item_id=item_a.id)

        assert created is True


@pytest.mark.django_db
class TestRemoveFromCart:
    """Tests for remove_from_cart() and clear_cart()"""

    def test_remove_entry(self, buyer, cart_with_two_items):
        remove_from_cart(user=buyer, entry_id=cart_with_two_items[0].id)

        assert get_cart_count(user=buyer) == 1

    def test_remove_other_users_entry_not_found(self, other_buyer, cart_with_two_items):
        with pytest.raises(CartEntryNotFoundError):
            remove_from_cart(user=other_buyer, entry_id=cart_with_two_items[0].id)

        assert CartEntry.objects.count() == 2

    def test_remove_unknown_entry_not_found(self, buyer):
        with pytest.raises(CartEntryNotFoundError):
            remove_from_cart(user=buyer, entry_id=uuid.uuid4())

    def test_clear_cart(self, buyer, cart_with_two_items):
        assert clear_cart(user=buyer) == 2
        assert get_cart_count(user=buyer) == 0


@pytest.mark.django_db
class TestGetCart:
    """Tests for get_cart()"""

    def test_empty_cart(self, buyer):
        contents = get_cart(user=buyer)

        assert contents.entries == []
        assert contents.quote is None

    def test_entries_in_insertion_order(self, buyer, cart_with_two_items):
        contents = get_cart(user=buyer)

        assert [e.id for e in contents.entries] == [e.id for e in cart_with_two_items]

    def test_summary_applies_bundle(self, buyer, cart_with_two_items, settings):
        settings.BUNDLE_DISCOUNT_PERCENTAGE = Decimal('10')

        quote = get_cart(user=buyer).quote

        assert quote.subtotal_minor == 15000
        assert quote.discount_minor == 1500
        assert quote.total_minor == 13500

    def test_summary_uses_current_price(self, buyer, cart_with_two_items, item_a):
        item_a.price_minor = 20000
        item_a.save()

        assert get_cart(user=buyer).quote.subtotal_minor == 25000

    def test_inactive_item_listed_but_not_priced(self, buyer, cart_with_two_items, item_b):
        item_b.is_active = False
        item_b.save()

        contents = get_cart(user=buyer)

        assert contents.count == 2
        assert len(contents.available_entries) == 1
        assert contents.quote.item_count == 1
        assert contents.quote.total_minor == 10000
        assert get_cart_count(user=buyer) == 2
