"""Data models and schemas.

- LegacyAssetLocator: Structured identifier recovered from a legacy path
- SegmentKind / SegmentClassification: Per-segment parse result
- UpgradeRecord: Attachment metadata persisted after an upgrade
"""

from cloud_media.models.locator import (
    LegacyAssetLocator,
    LocatorState,
    SegmentClassification,
    SegmentKind,
)
from cloud_media.models.upgrade import UpgradeRecord

__all__ = [
    "LegacyAssetLocator",
    "LocatorState",
    "SegmentClassification",
    "SegmentKind",
    "UpgradeRecord",
]
