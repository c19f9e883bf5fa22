"""Error taxonomy shared by the upload server and the dashboard client."""

from __future__ import annotations


class PhoneDropError(Exception):
    """Base class for all PhoneDrop errors."""


class Unauthorized(PhoneDropError):
    """Upload credential missing or wrong."""


class BadRequest(PhoneDropError):
    """Malformed submission (no file, empty name, missing address)."""


class PayloadTooLarge(BadRequest):
    """Upload exceeds the configured size limit."""


class BlobNotFound(PhoneDropError):
    """No stored object at the given address or pathname."""


class StoreUnavailable(PhoneDropError):
    """Any object-store side failure on list/put/delete."""


class UploadFailed(StoreUnavailable):
    """Store rejected or failed a put."""


class ListUnavailable(StoreUnavailable):
    """Listing could not be retrieved."""


class DeleteFailed(StoreUnavailable):
    """Store failed to remove an object."""


class FetchFailed(PhoneDropError):
    """Content body retrieval failed."""
