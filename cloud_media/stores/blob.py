"""Azure Blob Storage attachment metadata store.

Each attachment is one JSON document::

    {prefix}/{attachment_id}.json
    {"meta": {...}, "signature": {...}}

Writes read-modify-write the whole document with ``overwrite=True`` so
repeated upgrades of the same attachment are idempotent.  A missing blob
reads as an empty record.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from cloud_media.core.config import MediaConfig
from cloud_media.stores.base import AttachmentMetadataStore, MetadataStoreError

logger = logging.getLogger("cloud_media.stores.blob")


class BlobMetadataStore(AttachmentMetadataStore):
    """Attachment metadata persisted as JSON blobs.

    Args:
        blob_service_client: An Azure ``BlobServiceClient`` instance.
        config: Supplies the container name and blob prefix.
    """

    def __init__(self, blob_service_client: Any, config: MediaConfig | None = None) -> None:
        self._client = blob_service_client
        self._config = config or MediaConfig()

    def blob_path(self, attachment_id: str) -> str:
        return f"{self._config.metadata_prefix}/{attachment_id}.json"

    def _blob_client(self, attachment_id: str) -> Any:
        return self._client.get_blob_client(
            container=self._config.metadata_container,
            blob=self.blob_path(attachment_id),
        )

    def _read(self, attachment_id: str) -> dict[str, dict[str, Any]]:
        from azure.core.exceptions import ResourceNotFoundError

        path = self.blob_path(attachment_id)
        try:
            raw = self._blob_client(attachment_id).download_blob().readall()
        except ResourceNotFoundError:
            return {"meta": {}, "signature": {}}
        except Exception as exc:
            msg = f"Failed to read attachment metadata from {path}: {exc}"
            raise MetadataStoreError(msg) from exc

        try:
            document = json.loads(raw)
        except (TypeError, ValueError) as exc:
            msg = f"Attachment metadata at {path} is not valid JSON: {exc}"
            raise MetadataStoreError(msg) from exc

        return {
            "meta": dict(document.get("meta", {})),
            "signature": dict(document.get("signature", {})),
        }

    def _write(self, attachment_id: str, document: dict[str, dict[str, Any]]) -> None:
        path = self.blob_path(attachment_id)
        payload = json.dumps(document, sort_keys=True)
        try:
            self._blob_client(attachment_id).upload_blob(
                payload.encode("utf-8"),
                overwrite=True,
            )
        except Exception as exc:
            msg = f"Failed to upload attachment metadata to {path}: {exc}"
            raise MetadataStoreError(msg) from exc
        logger.debug("Attachment metadata written | path=%s", path)

    def get_meta(self, attachment_id: str, key: str) -> object | None:
        return self._read(attachment_id)["meta"].get(key)

    def update_meta(self, attachment_id: str, key: str, value: object) -> None:
        document = self._read(attachment_id)
        document["meta"][key] = value
        self._write(attachment_id, document)

    def get_signature(self, attachment_id: str) -> dict[str, str]:
        return dict(self._read(attachment_id)["signature"])

    def _store_signature(self, attachment_id: str, field: str, checksum: str) -> None:
        document = self._read(attachment_id)
        document["signature"][field] = checksum
        self._write(attachment_id, document)
