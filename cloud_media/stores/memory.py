"""In-process attachment metadata store."""

from __future__ import annotations

import copy
import threading

from cloud_media.stores.base import AttachmentMetadataStore


class InMemoryMetadataStore(AttachmentMetadataStore):
    """Dict-backed store.  Values are deep-copied in and out."""

    def __init__(self) -> None:
        self._meta: dict[str, dict[str, object]] = {}
        self._signatures: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    def get_meta(self, attachment_id: str, key: str) -> object | None:
        with self._lock:
            return copy.deepcopy(self._meta.get(attachment_id, {}).get(key))

    def update_meta(self, attachment_id: str, key: str, value: object) -> None:
        with self._lock:
            self._meta.setdefault(attachment_id, {})[key] = copy.deepcopy(value)

    def get_signature(self, attachment_id: str) -> dict[str, str]:
        with self._lock:
            return dict(self._signatures.get(attachment_id, {}))

    def _store_signature(self, attachment_id: str, field: str, checksum: str) -> None:
        with self._lock:
            self._signatures.setdefault(attachment_id, {})[field] = checksum

    def all_meta(self, attachment_id: str) -> dict[str, object]:
        """Snapshot of every meta key for one attachment."""
        with self._lock:
            return copy.deepcopy(self._meta.get(attachment_id, {}))
