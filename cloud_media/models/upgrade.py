"""Pydantic model for attachment metadata written after a legacy upgrade.

The record mirrors the fields the attachment-metadata store persists
for an upgraded asset.  ``transformation`` is omitted from the stored
meta when empty so that attachments without transformations keep no
stale key.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from cloud_media.core.constants import DEFAULT_ASSET_VERSION, META_KEYS
from cloud_media.models.locator import LegacyAssetLocator


class UpgradeRecord(BaseModel):
    """Persisted fields for one upgraded attachment.

    Attributes:
        public_id: Public identifier of the asset.
        version: Asset version (``>= 1``).
        transformation: Transformation descriptors recovered from the path.
        plugin_version: Version of the integration that performed the upgrade.
        cloud_token: Hashed cloud name; recorded as a signature, not as meta.
    """

    public_id: str
    version: int = Field(default=DEFAULT_ASSET_VERSION, ge=1)
    transformation: list[dict[str, Any]] = Field(default_factory=list)
    plugin_version: str = ""
    cloud_token: str = ""

    @classmethod
    def from_locator(cls, locator: LegacyAssetLocator, *, plugin_version: str) -> UpgradeRecord:
        """Build a record from a parsed locator.

        Raises:
            MalformedLocatorPath: If the locator has no public id.
        """
        return cls(
            public_id=locator.require_public_id(),
            version=locator.version,
            transformation=[dict(t) for t in locator.transformations],
            plugin_version=plugin_version,
            cloud_token=locator.cloud_token,
        )

    def to_meta(self) -> dict[str, object]:
        """Return ``{storage_key: value}`` for the path-derived fields.

        ``plugin_version`` is written by the caller on every upgrade branch
        and is therefore not part of this mapping.
        """
        meta: dict[str, object] = {
            META_KEYS["public_id"]: self.public_id,
            META_KEYS["version"]: self.version,
        }
        if self.transformation:
            meta[META_KEYS["transformation"]] = [dict(t) for t in self.transformation]
        return meta

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise to a JSON string."""
        return self.model_dump_json(indent=indent)
