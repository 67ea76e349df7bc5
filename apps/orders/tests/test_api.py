import pytest
import uuid
from django.urls import reverse
from rest_framework import status

from apps.cart.models import CartEntry
from apps.entitlements.models import Purchase
from apps.orders.models import Order, OrderItem, PaymentStatus


@pytest.mark.django_db
class TestCheckoutAPI:
    """Tests for POST /api/orders/checkout/"""

    def test_checkout_creates_order(self, buyer_client, filled_cart, settings):
        settings.BUNDLE_DISCOUNT_PERCENTAGE = 10

        response = buyer_client.post(reverse('orders:order-checkout'))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['subtotal'] == '150.00'
        assert response.data['discount'] == '15.00'
        assert response.data['total'] == '135.00'
        assert response.data['discount_kind'] == 'bundle'
        assert response.data['payment_status'] == 'pending'
        assert len(response.data['items']) == 2

    def test_empty_cart(self, buyer_client):
        response = buyer_client.post(reverse('orders:order-checkout'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'empty_cart'

    def test_conflict_lists_items(self, buyer_client, buyer, single_order, item_a):
        CartEntry.objects.create(user=buyer, catalog_item=item_a)

        response = buyer_client.post(reverse('orders:order-checkout'))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'conflict_already_owned'
        assert response.data['items'][0]['id'] == str(item_a.id)

    def test_unverified_user_forbidden(self, client_for, unverified_user):
        response = client_for(unverified_user).post(reverse('orders:order-checkout'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestOrderList:
    """Tests for GET /api/orders/"""

    def test_lists_own_orders(self, buyer_client, client_for, other_buyer, single_order):
        response = buyer_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data['results']] == [str(single_order.id)]

        response = client_for(other_buyer).get(reverse('orders:order-list'))
        assert response.data['results'] == []

    def test_other_users_order_404(self, client_for, other_buyer, single_order):
        url = reverse('orders:order-detail', args=[single_order.id])
        response = client_for(other_buyer).get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('orders:order-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPaymentRequestAPI:
    """Tests for /api/orders/{id}/payment_request/"""

    def test_create_then_reuse(self, buyer_client, pending_order):
        url = reverse('orders:order-payment-request', args=[pending_order.id])

        first = buyer_client.post(url)
        second = buyer_client.post(url)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_200_OK
        assert first.data['amount'] == '135.00'
        assert first.data['currency'] == 'THB'
        assert first.data['qr_code'].startswith('data:image/png;base64,')
        assert second.data['payment_reference'] == first.data['payment_reference']

    def test_get_before_create_404(self, buyer_client, pending_order):
        url = reverse('orders:order-payment-request', args=[pending_order.id])

        response = buyer_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_not_pending_conflict(self, buyer_client, reviewer_client, pending_order):
        reviewer_client.post(reverse('orders:order-approve', args=[pending_order.id]))

        response = buyer_client.post(reverse('orders:order-payment-request', args=[pending_order.id]))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'order_not_pending'

    def test_other_users_order(self, client_for, other_buyer, pending_order):
        url = reverse('orders:order-payment-request', args=[pending_order.id])

        response = client_for(other_buyer).post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestReconciliationAPI:
    """Tests for pending / approve / reject"""

    def test_pending_queue(self, reviewer_client, pending_order):
        response = reviewer_client.get(reverse('orders:order-pending'))

        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data['results']] == [str(pending_order.id)]

    def test_pending_queue_forbidden_for_buyers(self, buyer_client, pending_order):
        response = buyer_client.get(reverse('orders:order-pending'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_approve(self, reviewer_client, pending_order, buyer):
        url = reverse('orders:order-approve', args=[pending_order.id])

        response = reviewer_client.post(url, {'bank_reference': 'KBANK-123'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payment_status'] == 'paid'
        assert response.data['bank_reference'] == 'KBANK-123'
        assert Purchase.objects.filter(user=buyer).count() == 2

    def test_approve_twice_conflict(self, reviewer_client, pending_order):
        url = reverse('orders:order-approve', args=[pending_order.id])
        reviewer_client.post(url)

        response = reviewer_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'invalid_transition'
        assert Purchase.objects.filter(order=pending_order).count() == 2

    def test_approve_owned_item_conflict(self, reviewer_client, pending_order, buyer, item_a):
        reviewer_client.post(reverse('orders:order-approve', args=[pending_order.id]))
        order = Order.objects.create(user=buyer, subtotal_minor=10000, total_minor=10000)
        OrderItem.objects.create(order=order, catalog_item=item_a, unit_price_minor=10000)

        response = reviewer_client.post(reverse('orders:order-approve', args=[order.id]))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'conflict_already_owned'
        assert response.data['items'][0]['id'] == str(item_a.id)
        assert Order.objects.get(id=order.id).payment_status == PaymentStatus.PENDING

    def test_buyer_cannot_approve(self, buyer_client, pending_order):
        response = buyer_client.post(reverse('orders:order-approve', args=[pending_order.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Order.objects.get(id=pending_order.id).payment_status == PaymentStatus.PENDING

    def test_approve_unknown_order(self, reviewer_client):
        response = reviewer_client.post(reverse('orders:order-approve', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reject(self, reviewer_client, pending_order):
        url = reverse('orders:order-reject', args=[pending_order.id])

        response = reviewer_client.post(url, {'reason': 'Transfer not found'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payment_status'] == 'failed'
        assert response.data['rejection_reason'] == 'Transfer not found'
        assert not Purchase.objects.exists()

    def test_reject_requires_reason(self, reviewer_client, pending_order):
        url = reverse('orders:order-reject', args=[pending_order.id])

        response = reviewer_client.post(url, {'reason': '  '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'validation_error'

    def test_reject_then_buy_again(self, reviewer_client, buyer_client, buyer, single_order, item_a):
        """Rejected items go back on sale for the buyer."""
        reviewer_client.post(
            reverse('orders:order-reject', args=[single_order.id]),
            {'reason': 'No transfer'},
            format='json'
        )

        add = buyer_client.post(reverse('cart:add-item'), {'catalog_item_id': str(item_a.id)}, format='json')
        response = buyer_client.post(reverse('orders:order-checkout'))

        assert add.status_code == status.HTTP_201_CREATED
        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestMalformedOrderId:
    """Order ids that are not UUIDs never reach the services"""

    BAD_ID = '-' * 36

    @pytest.mark.parametrize('action', ['approve', 'reject'])
    def test_review_actions_404(self, reviewer_client, action):
        response = reviewer_client.post(
            f'/api/orders/{self.BAD_ID}/{action}/',
            {'reason': 'No transfer'},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['error'] == 'not_found'

    @pytest.mark.parametrize('method', ['get', 'post'])
    def test_payment_request_404(self, buyer_client, method):
        response = getattr(buyer_client, method)(f'/api/orders/{self.BAD_ID}/payment_request/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_detail_404(self, buyer_client):
        response = buyer_client.get(f'/api/orders/{"z" * 8}-0000-0000-0000-000000000000/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
