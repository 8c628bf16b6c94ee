"""Upgrade activity: convert a legacy attachment to structured metadata.

Attachments created by the v1 integration stored a full delivery URL as
their attached file.  This activity recovers the public id, version and
transformations from that URL and writes them through an
``AttachmentMetadataStore``.

Branch selection:
- ``attached_file`` is an absolute ``http(s)`` URL → parse its path.
- Otherwise, or when the parsed path yields no public id → fall back to
  the already-stored public id (``resolve_public_id``).

Every branch stamps ``plugin_version`` and records the ``upgrade`` and
``public_id`` signatures.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from cloud_media.core.constants import (
    ALLOWED_URL_SCHEMES,
    META_KEYS,
    SIGNATURE_CLOUD_NAME,
    SIGNATURE_PUBLIC_ID,
    SIGNATURE_UPGRADE,
)
from cloud_media.core.exceptions import MalformedLocatorPath
from cloud_media.models.upgrade import UpgradeRecord
from cloud_media.stores.base import AttachmentMetadataStore
from cloud_media.utils.locator_parser import parse_legacy_path
from cloud_media.utils.transformations import Recognizer, get_transformations_from_string

logger = logging.getLogger("cloud_media.activities.upgrade_asset")


def legacy_url_path(attached_file: str) -> str | None:
    """Return the decoded URL path if ``attached_file`` is an absolute URL.

    Returns ``None`` for relative paths, non-HTTP schemes, URLs without a
    host, unparseable input, and URLs whose path is empty after trimming.
    """
    try:
        url = httpx.URL(attached_file)
    except (httpx.InvalidURL, TypeError):
        return None
    if url.scheme not in ALLOWED_URL_SCHEMES or not url.host:
        return None
    path = url.path
    if not path.strip("/"):
        return None
    return path


def convert_legacy_attachment(
    attachment_id: str,
    attached_file: str,
    *,
    store: AttachmentMetadataStore,
    plugin_version: str,
    recognize_transform: Recognizer = get_transformations_from_string,
    resolve_public_id: Callable[[str], str] | None = None,
) -> str:
    """Convert one legacy attachment and persist its metadata.

    Args:
        attachment_id: Opaque attachment record identifier.
        attached_file: The attachment's stored file reference.
        store: Metadata store written to.
        plugin_version: Version stamped on the attachment.
        recognize_transform: Transformation recognizer for path segments.
        resolve_public_id: Fallback lookup for the public id.  Defaults to
            ``store.get_public_id``.

    Returns:
        The attachment's public id (may be empty if neither branch knows it).

    Raises:
        MetadataStoreError: If the store cannot be written.
    """
    resolve = resolve_public_id or store.get_public_id
    public_id = ""
    path = legacy_url_path(attached_file)

    if path is not None:
        locator = parse_legacy_path(path, recognize_transform)
        try:
            record = UpgradeRecord.from_locator(locator, plugin_version=plugin_version)
        except MalformedLocatorPath as exc:
            logger.warning(
                "Legacy path unusable, using stored public id | attachment=%s | path=%s | code=%s",
                attachment_id,
                path,
                exc.code,
            )
        else:
            for key, value in record.to_meta().items():
                store.update_meta(attachment_id, key, value)
            store.set_signature_item(attachment_id, SIGNATURE_CLOUD_NAME, record.cloud_token)
            public_id = record.public_id
            logger.info(
                "Legacy attachment converted | attachment=%s | public_id=%s | version=%d"
                " | transformations=%d",
                attachment_id,
                public_id,
                record.version,
                len(record.transformation),
            )

    if not public_id:
        public_id = resolve(attachment_id)
        logger.info(
            "Attachment upgraded from stored public id | attachment=%s | public_id=%s",
            attachment_id,
            public_id,
        )

    store.update_meta(attachment_id, META_KEYS["plugin_version"], plugin_version)
    store.set_signature_item(attachment_id, SIGNATURE_UPGRADE)
    store.set_signature_item(attachment_id, SIGNATURE_PUBLIC_ID)

    return public_id


def convert_legacy_attachments(
    attachments: dict[str, str],
    *,
    store: AttachmentMetadataStore,
    plugin_version: str,
    recognize_transform: Recognizer = get_transformations_from_string,
) -> dict[str, str]:
    """Convert many attachments; returns ``{attachment_id: public_id}``."""
    return {
        attachment_id: convert_legacy_attachment(
            attachment_id,
            attached_file,
            store=store,
            plugin_version=plugin_version,
            recognize_transform=recognize_transform,
        )
        for attachment_id, attached_file in attachments.items()
    }
