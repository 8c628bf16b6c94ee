"""Tests for the attachment metadata stores.

Covers:
- Signature computation
- In-memory store isolation
- Blob store read/modify/write, missing blobs, SDK failures (mocked)
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import ResourceNotFoundError

from cloud_media.core.config import MediaConfig
from cloud_media.core.constants import META_KEYS
from cloud_media.stores.base import MetadataStoreError, compute_signature
from cloud_media.stores.blob import BlobMetadataStore
from cloud_media.stores.memory import InMemoryMetadataStore

# ===========================================================================
# compute_signature
# ===========================================================================


class TestComputeSignature:
    def test_key_order_irrelevant(self) -> None:
        assert compute_signature({"a": 1, "b": 2}) == compute_signature({"b": 2, "a": 1})

    def test_distinct_values(self) -> None:
        assert compute_signature("a") != compute_signature("b")

    def test_hex_sha256(self) -> None:
        assert len(compute_signature(1)) == 64


# ===========================================================================
# InMemoryMetadataStore
# ===========================================================================


class TestInMemoryMetadataStore:
    def test_missing_meta_is_none(self, memory_store: InMemoryMetadataStore) -> None:
        assert memory_store.get_meta("1", "k") is None

    def test_update_and_get(self, memory_store: InMemoryMetadataStore) -> None:
        memory_store.update_meta("1", "k", [1, 2])
        assert memory_store.get_meta("1", "k") == [1, 2]

    def test_values_are_copied(self, memory_store: InMemoryMetadataStore) -> None:
        value = [{"w": 1}]
        memory_store.update_meta("1", "k", value)
        value[0]["w"] = 2
        fetched = memory_store.get_meta("1", "k")
        assert fetched == [{"w": 1}]
        fetched.append({})  # type: ignore[union-attr]
        assert memory_store.get_meta("1", "k") == [{"w": 1}]

    def test_signature_from_stored_meta(self, memory_store: InMemoryMetadataStore) -> None:
        memory_store.update_meta("1", META_KEYS["public_id"], "a/b")
        checksum = memory_store.set_signature_item("1", "public_id")
        assert checksum == compute_signature("a/b")
        assert memory_store.get_signature("1") == {"public_id": checksum}

    def test_signature_with_explicit_value(self, memory_store: InMemoryMetadataStore) -> None:
        checksum = memory_store.set_signature_item("1", "cloud_name", "token")
        assert checksum == compute_signature("token")

    def test_get_public_id(self, memory_store: InMemoryMetadataStore) -> None:
        assert memory_store.get_public_id("1") == ""
        memory_store.update_meta("1", META_KEYS["public_id"], "x/y")
        assert memory_store.get_public_id("1") == "x/y"


# ===========================================================================
# BlobMetadataStore
# ===========================================================================


def _blob_store(document: dict[str, object] | None = None) -> tuple[BlobMetadataStore, MagicMock]:
    service = MagicMock()
    blob_client = service.get_blob_client.return_value
    if document is None:
        blob_client.download_blob.side_effect = ResourceNotFoundError("missing")
    else:
        blob_client.download_blob.return_value.readall.return_value = json.dumps(
            document
        ).encode("utf-8")
    return BlobMetadataStore(service, MediaConfig()), blob_client


class TestBlobMetadataStore:
    def test_blob_path(self) -> None:
        store = BlobMetadataStore(MagicMock(), MediaConfig(metadata_prefix="meta/v2"))
        assert store.blob_path("42") == "meta/v2/42.json"

    def test_container_and_path(self) -> None:
        store, _ = _blob_store({"meta": {"k": 1}, "signature": {}})
        store.get_meta("42", "k")
        store._client.get_blob_client.assert_called_with(
            container="attachment-metadata", blob="attachments/42.json"
        )

    def test_missing_blob_reads_empty(self) -> None:
        store, _ = _blob_store(None)
        assert store.get_meta("1", "k") is None
        assert store.get_signature("1") == {}

    def test_get_meta(self) -> None:
        store, _ = _blob_store({"meta": {"k": "v"}, "signature": {"f": "abc"}})
        assert store.get_meta("1", "k") == "v"
        assert store.get_signature("1") == {"f": "abc"}

    def test_update_meta_merges_and_overwrites(self) -> None:
        store, blob_client = _blob_store({"meta": {"a": 1}, "signature": {"s": "x"}})
        store.update_meta("1", "b", 2)
        args, kwargs = blob_client.upload_blob.call_args
        assert kwargs == {"overwrite": True}
        written = json.loads(args[0].decode("utf-8"))
        assert written == {"meta": {"a": 1, "b": 2}, "signature": {"s": "x"}}

    def test_update_meta_on_missing_blob(self) -> None:
        store, blob_client = _blob_store(None)
        store.update_meta("1", "a", "x")
        written = json.loads(blob_client.upload_blob.call_args.args[0].decode("utf-8"))
        assert written == {"meta": {"a": "x"}, "signature": {}}

    def test_set_signature_item(self) -> None:
        store, blob_client = _blob_store({"meta": {META_KEYS["public_id"]: "p"}})
        checksum = store.set_signature_item("1", "public_id")
        written = json.loads(blob_client.upload_blob.call_args.args[0].decode("utf-8"))
        assert written["signature"] == {"public_id": checksum}
        assert checksum == compute_signature("p")

    def test_read_failure_wrapped(self) -> None:
        store, blob_client = _blob_store({})
        blob_client.download_blob.side_effect = ConnectionError("reset")
        with pytest.raises(MetadataStoreError) as exc_info:
            store.get_meta("1", "k")
        assert exc_info.value.retryable is True
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_corrupt_document_wrapped(self) -> None:
        store, blob_client = _blob_store({})
        blob_client.download_blob.return_value.readall.return_value = b"{broken"
        with pytest.raises(MetadataStoreError):
            store.get_meta("1", "k")

    def test_upload_failure_wrapped(self) -> None:
        store, blob_client = _blob_store({})
        blob_client.upload_blob.side_effect = RuntimeError("403")
        with pytest.raises(MetadataStoreError) as exc_info:
            store.update_meta("1", "k", "v")
        assert "attachments/1.json" in exc_info.value.message
