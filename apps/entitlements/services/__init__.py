"""
Entitlements services - access decisions and gated downloads.
"""

from .resolver import (
    Access,
    NO_ACCESS,
    resolve_access,
    access_reason,
    has_access,
    can_review,
    get_user_purchases,
)

from .downloads import open_download

from .exceptions import (
    EntitlementsServiceError,
    AccessDeniedError,
    DownloadUnavailableError,
)

__all__ = [
    'Access',
    'NO_ACCESS',
    'resolve_access',
    'access_reason',
    'has_access',
    'can_review',
    'get_user_purchases',
    'open_download',
    # Exceptions
    'EntitlementsServiceError',
    'AccessDeniedError',
    'DownloadUnavailableError',
]
