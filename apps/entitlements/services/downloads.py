"""Gated access to cheat sheet files in the blob store."""

import logging

from django.core.files.storage import default_storage

from apps.catalog.models import CatalogItem
from .exceptions import AccessDeniedError, DownloadUnavailableError
from .resolver import access_reason

logger = logging.getLogger(__name__)


def open_download(*, user, item: CatalogItem):
    """
    Open the item's file for streaming once access is confirmed.

    Args:
        user: Requesting user
        item: Catalog item to download

    Returns:
        Open binary file object from the default storage backend

    Raises:
        AccessDeniedError: If the user holds no entitlement
        DownloadUnavailableError: If the item has no stored file
    """
    access = access_reason(user=user, item=item)
    if not access.has_access:
        raise AccessDeniedError("You must purchase this cheat sheet to download it")

    if not item.file_path:
        raise DownloadUnavailableError("This cheat sheet has no file attached")

    try:
        handle = default_storage.open(item.file_path, 'rb')
    except FileNotFoundError as e:
        logger.error("File %s for item %s missing from storage", item.file_path, item.pk)
        raise DownloadUnavailableError("The file for this cheat sheet is unavailable") from e

    logger.info("User %s downloading item %s (%s)", user.pk, item.pk, access.reason)
    return handle
