"""Read helpers for catalog items."""

from uuid import UUID

from django.db.models import QuerySet

from apps.catalog.models import ApprovalStatus, CatalogItem
from .exceptions import CatalogItemNotFoundError


def get_visible_items() -> QuerySet[CatalogItem]:
    """Active, approved items in catalog order."""
    return CatalogItem.objects.filter(
        is_active=True,
        approval_status=ApprovalStatus.APPROVED,
    ).select_related('created_by')


def get_item_by_id(*, item_id: UUID) -> CatalogItem:
    """
    Fetch any catalog item, visible or not.

    Raises:
        CatalogItemNotFoundError: If the item doesn't exist
    """
    try:
        return CatalogItem.objects.select_related('created_by').get(id=item_id)
    except CatalogItem.DoesNotExist:
        raise CatalogItemNotFoundError(f"Catalog item {item_id} not found")
