"""Attachment metadata stores.

- base: ``AttachmentMetadataStore`` contract and ``MetadataStoreError``
- memory: In-process store (tests, bulk dry runs)
- blob: Azure Blob Storage store, one JSON document per attachment
"""

from cloud_media.stores.base import AttachmentMetadataStore, MetadataStoreError
from cloud_media.stores.memory import InMemoryMetadataStore

__all__ = [
    "AttachmentMetadataStore",
    "InMemoryMetadataStore",
    "MetadataStoreError",
]
