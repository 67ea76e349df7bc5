import pytest
import uuid
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestCheckAccess:
    """Tests for GET /api/entitlements/access/{item_id}/"""

    def test_purchased(self, buyer_client, paid_order, item_a):
        response = buyer_client.get(reverse('entitlements:check-access', args=[item_a.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['has_access'] is True
        assert response.data['reason'] == 'purchased'
        assert response.data['order_id'] == str(paid_order.id)
        assert response.data['can_review'] is True

    def test_owner_cannot_review(self, client_for, seller, item_a):
        response = client_for(seller).get(reverse('entitlements:check-access', args=[item_a.id]))

        assert response.data['reason'] == 'owner'
        assert response.data['has_access'] is True
        assert response.data['can_review'] is False

    def test_no_access(self, buyer_client, item_b):
        response = buyer_client.get(reverse('entitlements:check-access', args=[item_b.id]))

        assert response.data['has_access'] is False
        assert response.data['reason'] == 'none'
        assert response.data['order_id'] is None
        assert response.data['can_review'] is False

    def test_free_item_can_be_reviewed(self, buyer_client, free_item):
        response = buyer_client.get(reverse('entitlements:check-access', args=[free_item.id]))

        assert response.data['reason'] == 'free'
        assert response.data['can_review'] is True

    def test_unknown_item(self, buyer_client):
        response = buyer_client.get(reverse('entitlements:check-access', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'not_found'


@pytest.mark.django_db
class TestMyPurchases:
    """Tests for GET /api/entitlements/"""

    def test_lists_purchases(self, buyer_client, paid_order, item_a):
        response = buyer_client.get(reverse('entitlements:my-purchases'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['catalog_item']['id'] == str(item_a.id)

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('entitlements:my-purchases'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestDownload:
    """Tests for GET /api/entitlements/download/{item_id}/"""

    def test_purchaser_downloads(self, media_root, buyer_client, paid_order, item_a):
        item_a.file_path = default_storage.save('sheets/mas116.pdf', ContentFile(b'%PDF-1.4 sheet'))
        item_a.save()

        response = buyer_client.get(reverse('entitlements:download', args=[item_a.id]))

        assert response.status_code == status.HTTP_200_OK
        assert b''.join(response.streaming_content) == b'%PDF-1.4 sheet'
        assert 'attachment' in response['Content-Disposition']

    def test_non_buyer_denied(self, media_root, buyer_client, item_b):
        item_b.file_path = default_storage.save('sheets/scs138.pdf', ContentFile(b'%PDF'))
        item_b.save()

        response = buyer_client.get(reverse('entitlements:download', args=[item_b.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'access_denied'

    def test_missing_file(self, media_root, buyer_client, paid_order, item_a):
        item_a.file_path = 'sheets/gone.pdf'
        item_a.save()

        response = buyer_client.get(reverse('entitlements:download', args=[item_a.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_no_file_attached(self, buyer_client, free_item):
        response = buyer_client.get(reverse('entitlements:download', args=[free_item.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
