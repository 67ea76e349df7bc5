import pytest
import uuid
from unittest import mock
from django.db import IntegrityError

from apps.accounts.models import User
from apps.cart.models import CartEntry
from apps.entitlements.models import Purchase
from apps.entitlements.services import has_access
from apps.orders.models import Order, OrderItem, PaymentStatus
from apps.orders.services import (
    ConflictAlreadyOwnedError,
    ForbiddenError,
    InvalidTransitionError,
    OrderNotFoundError,
    RejectionReasonRequiredError,
    approve_payment,
    checkout,
    get_pending_orders,
    reject_payment,
)


@pytest.mark.django_db
class TestApprovePayment:
    """Tests for approve_payment()"""

    def test_approve_grants_every_item(self, pending_order, buyer, reviewer, item_a, item_b):
        order = approve_payment(order_id=pending_order.id, reviewer=reviewer, bank_reference=' TX-998 ')

        assert order.payment_status == PaymentStatus.PAID
        assert order.reviewed_by == reviewer
        assert order.reviewed_at is not None
        assert order.bank_reference == 'TX-998'

        purchases = Purchase.objects.filter(order=order)
        assert {p.catalog_item_id for p in purchases} == {item_a.id, item_b.id}
        assert all(p.user_id == buyer.id for p in purchases)
        assert has_access(user=buyer, item=item_a)
        assert has_access(user=buyer, item=item_b)

    def test_second_approval_is_invalid(self, pending_order, reviewer):
        """Re-approving never duplicates purchases."""
        approve_payment(order_id=pending_order.id, reviewer=reviewer)

        with pytest.raises(InvalidTransitionError):
            approve_payment(order_id=pending_order.id, reviewer=reviewer)

        assert Purchase.objects.filter(order=pending_order).count() == 2

    def test_approve_after_reject_is_invalid(self, pending_order, reviewer):
        reject_payment(order_id=pending_order.id, reviewer=reviewer, reason='No transfer')

        with pytest.raises(InvalidTransitionError):
            approve_payment(order_id=pending_order.id, reviewer=reviewer)

        assert not Purchase.objects.exists()

    def test_non_reviewer_forbidden(self, pending_order, buyer):
        with pytest.raises(ForbiddenError):
            approve_payment(order_id=pending_order.id, reviewer=buyer)

        pending_order.refresh_from_db()
        assert pending_order.payment_status == PaymentStatus.PENDING

    def test_inactive_staff_forbidden(self, pending_order, reviewer):
        reviewer.is_active = False
        reviewer.save()

        with pytest.raises(ForbiddenError):
            approve_payment(order_id=pending_order.id, reviewer=reviewer)

    def test_superuser_can_approve(self, pending_order, buyer):
        admin = User.objects.create_superuser(email='admin@example.com', password='TestPass123!')

        order = approve_payment(order_id=pending_order.id, reviewer=admin)

        assert order.payment_status == PaymentStatus.PAID

    def test_unknown_order(self, reviewer):
        with pytest.raises(OrderNotFoundError):
            approve_payment(order_id=uuid.uuid4(), reviewer=reviewer)

    def test_duplicate_entitlement_rolls_back_approval(self, pending_order, buyer, reviewer, item_a):
        """If the buyer already owns an item, the approval isn't committed."""
        approve_payment(order_id=pending_order.id, reviewer=reviewer)
        order = Order.objects.create(user=buyer, subtotal_minor=10000, total_minor=10000)
        OrderItem.objects.create(order=order, catalog_item=item_a, unit_price_minor=10000)

        with pytest.raises(ConflictAlreadyOwnedError) as exc_info:
            approve_payment(order_id=order.id, reviewer=reviewer)

        assert [i['id'] for i in exc_info.value.items] == [str(item_a.id)]
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING
        assert not Purchase.objects.filter(order=order).exists()

    def test_entitlement_race_rolls_back_approval(self, pending_order, reviewer):
        """A purchase inserted between the check and the insert still ends as a conflict."""
        with mock.patch.object(Purchase.objects, 'bulk_create', side_effect=IntegrityError):
            with pytest.raises(ConflictAlreadyOwnedError):
                approve_payment(order_id=pending_order.id, reviewer=reviewer)

        pending_order.refresh_from_db()
        assert pending_order.payment_status == PaymentStatus.PENDING
        assert pending_order.reviewed_by is None


@pytest.mark.django_db
class TestRejectPayment:
    """Tests for reject_payment()"""

    def test_reject_stores_reason(self, pending_order, reviewer):
        order = reject_payment(order_id=pending_order.id, reviewer=reviewer, reason='  Amount too low ')

        assert order.payment_status == PaymentStatus.FAILED
        assert order.rejection_reason == 'Amount too low'
        assert order.reviewed_by == reviewer
        assert not Purchase.objects.exists()

    def test_blank_reason_required(self, pending_order, reviewer):
        with pytest.raises(RejectionReasonRequiredError):
            reject_payment(order_id=pending_order.id, reviewer=reviewer, reason='   ')

        pending_order.refresh_from_db()
        assert pending_order.payment_status == PaymentStatus.PENDING

    def test_reject_paid_order_invalid(self, pending_order, reviewer):
        approve_payment(order_id=pending_order.id, reviewer=reviewer)

        with pytest.raises(InvalidTransitionError):
            reject_payment(order_id=pending_order.id, reviewer=reviewer, reason='Oops')

        assert Purchase.objects.filter(order=pending_order).count() == 2

    def test_non_reviewer_forbidden(self, pending_order, buyer):
        with pytest.raises(ForbiddenError):
            reject_payment(order_id=pending_order.id, reviewer=buyer, reason='Nope')


@pytest.mark.django_db
class TestPendingOrders:
    """Tests for get_pending_orders()"""

    def test_only_pending_oldest_first(self, pending_order, reviewer, other_buyer, make_item):
        CartEntry.objects.create(user=other_buyer, catalog_item=make_item(title='Other'))
        newer = checkout(user=other_buyer)
        assert [o.id for o in get_pending_orders()] == [pending_order.id, newer.id]

        approve_payment(order_id=pending_order.id, reviewer=reviewer)

        assert [o.id for o in get_pending_orders()] == [newer.id]
