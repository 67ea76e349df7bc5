"""
Entitlement resolver.

Answers whether a user may use a catalog item and why. The answer is read
straight from committed rows, so it reflects an approval as soon as the
approving transaction commits.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import UUID

from django.db.models import QuerySet

from apps.catalog.models import CatalogItem
from apps.entitlements.models import AccessReason, Purchase


@dataclass(frozen=True)
class Access:
    """Access decision for one (user, item) pair."""

    reason: str
    order_id: Optional[UUID] = None

    @property
    def has_access(self):
        return self.reason != AccessReason.NONE


NO_ACCESS = Access(reason=AccessReason.NONE)


def _is_authenticated(user) -> bool:
    return user is not None and user.is_authenticated


def resolve_access(*, user, items: Iterable[CatalogItem]) -> dict[UUID, Access]:
    """
    Resolve access for many items with a single purchase query.

    Precedence: purchased, owner, free (active items only), none.
    Anonymous users can only get ``free`` or ``none``.

    Args:
        user: Requesting user (may be anonymous or None)
        items: Catalog items to check

    Returns:
        Mapping of item id to Access
    """
    items = list(items)
    purchased = {}
    if _is_authenticated(user) and items:
        purchased = dict(
            Purchase.objects
            .filter(user=user, catalog_item__in=[item.pk for item in items])
            .values_list('catalog_item_id', 'order_id')
        )

    result = {}
    for item in items:
        if item.pk in purchased:
            result[item.pk] = Access(AccessReason.PURCHASED, purchased[item.pk])
        elif _is_authenticated(user) and item.created_by_id == user.pk:
            result[item.pk] = Access(AccessReason.OWNER)
        elif item.is_free and item.is_active:
            result[item.pk] = Access(AccessReason.FREE)
        else:
            result[item.pk] = NO_ACCESS
    return result


def access_reason(*, user, item: CatalogItem) -> Access:
    """Why (or why not) ``user`` may access ``item``."""
    return resolve_access(user=user, items=[item])[item.pk]


def has_access(*, user, item: CatalogItem) -> bool:
    return access_reason(user=user, item=item).has_access


def can_review(*, user, item: CatalogItem) -> bool:
    """Only free items and paid purchasers may be reviewed; owners may not."""
    return access_reason(user=user, item=item).reason in (
        AccessReason.FREE,
        AccessReason.PURCHASED,
    )


def get_user_purchases(*, user) -> QuerySet[Purchase]:
    """User's entitlements, newest first."""
    return (
        Purchase.objects
        .filter(user=user)
        .select_related('catalog_item', 'order')
        .order_by('-granted_at')
    )
