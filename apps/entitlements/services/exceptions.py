"""Domain exceptions for entitlements app."""


class EntitlementsServiceError(Exception):
    """Base exception for all entitlement service errors."""
    code = 'validation_error'


class AccessDeniedError(EntitlementsServiceError):
    """User holds no entitlement for the item."""
    code = 'access_denied'


class DownloadUnavailableError(EntitlementsServiceError):
    """Item has no stored file, or the blob store lost it."""
    code = 'not_found'
