"""AttachmentMetadataStore abstract base class.

Defines the contract the upgrade activity writes through.  The activity
only produces values; where they live and how change-detection
signatures are computed is the store's concern.

Signatures:
    ``set_signature_item(attachment_id, field, value)`` records a checksum
    for ``field``.  When ``value`` is ``None`` the checksum is taken over
    the field's currently stored meta value, so a later edit of that meta
    is detectable.
"""

from __future__ import annotations

import abc
import hashlib
import json

from cloud_media.core.constants import META_KEYS
from cloud_media.core.exceptions import TransientError


class MetadataStoreError(TransientError):
    """Raised when the backing store cannot be read or written."""

    default_stage = "metadata_store"
    default_code = "METADATA_STORE_FAILED"


def compute_signature(value: object) -> str:
    """SHA-256 hex digest of the canonical JSON form of ``value``."""
    canonical = json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class AttachmentMetadataStore(abc.ABC):
    """Key/value metadata attached to an opaque attachment id."""

    @abc.abstractmethod
    def get_meta(self, attachment_id: str, key: str) -> object | None:
        """Return the stored value for ``key``, or ``None``."""

    @abc.abstractmethod
    def update_meta(self, attachment_id: str, key: str, value: object) -> None:
        """Create or overwrite ``key``."""

    @abc.abstractmethod
    def get_signature(self, attachment_id: str) -> dict[str, str]:
        """Return ``{field: checksum}`` for the attachment."""

    @abc.abstractmethod
    def _store_signature(self, attachment_id: str, field: str, checksum: str) -> None:
        """Persist one checksum."""

    def set_signature_item(
        self,
        attachment_id: str,
        field: str,
        value: object | None = None,
    ) -> str:
        """Record a change-detection checksum for ``field`` and return it."""
        if value is None:
            value = self.get_meta(attachment_id, META_KEYS.get(field, field))
            if value is None:
                value = field
        checksum = compute_signature(value)
        self._store_signature(attachment_id, field, checksum)
        return checksum

    def get_public_id(self, attachment_id: str) -> str:
        """Return the already-stored public id, or ``""``."""
        value = self.get_meta(attachment_id, META_KEYS["public_id"])
        return str(value) if value else ""
