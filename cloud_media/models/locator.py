"""Data model for a parsed legacy asset locator.

A legacy locator is recovered from a v1 delivery path of the form::

    /<cloud>/[image|video]/upload/[<transformation>/]v<digits>/<public-id>.<ext>

Parsing is a single ordered pass over the path segments.  Each segment
is classified exactly once into a ``SegmentClassification`` and folded
into an immutable ``LocatorState``; the final state is frozen into a
``LegacyAssetLocator``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

from cloud_media.core.constants import DEFAULT_ASSET_VERSION
from cloud_media.core.exceptions import MalformedLocatorPath


class SegmentKind(enum.Enum):
    """How a single legacy path segment was consumed."""

    CLOUD_TOKEN = "cloud_token"
    RESERVED = "reserved"
    TRANSFORMATION = "transformation"
    VERSION = "version"
    PUBLIC_ID = "public_id"


@dataclass(frozen=True, slots=True)
class SegmentClassification:
    """Tagged result of classifying one path segment.

    Attributes:
        kind: Which slot the segment fills.
        segment: The raw segment text.
        cloud_token: Hashed cloud name (``CLOUD_TOKEN`` only).
        version: Parsed asset version (``VERSION`` only).
        transformations: Recognised transformation set (``TRANSFORMATION`` only).
    """

    kind: SegmentKind
    segment: str
    cloud_token: str | None = None
    version: int | None = None
    transformations: list[dict[str, object]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LocatorState:
    """Parser state: each slot is filled at most once.

    ``None`` means the slot has not been claimed by any segment yet.
    """

    cloud_token: str | None = None
    version: int | None = None
    transformations: list[dict[str, object]] | None = None
    public_id_parts: tuple[str, ...] = ()

    def apply(self, result: SegmentClassification) -> LocatorState:
        """Return a new state with ``result`` folded in."""
        if result.kind is SegmentKind.CLOUD_TOKEN:
            return replace(self, cloud_token=result.cloud_token)
        if result.kind is SegmentKind.TRANSFORMATION:
            return replace(self, transformations=list(result.transformations))
        if result.kind is SegmentKind.VERSION:
            return replace(self, version=result.version)
        if result.kind is SegmentKind.PUBLIC_ID:
            return replace(self, public_id_parts=(*self.public_id_parts, result.segment))
        return self


@dataclass(frozen=True, slots=True)
class LegacyAssetLocator:
    """A structured media identifier reconstructed from a legacy path.

    Attributes:
        cloud_token: MD5 hex digest of the first path segment.  The cloud
            name itself is never retained.
        version: Asset version; ``1`` when the path has no version segment.
        transformations: Ordered transformation descriptors, possibly empty.
        public_id: Slash-joined public id with the final extension removed.
            Empty when the path carried no identifying segments.
    """

    cloud_token: str = ""
    version: int = DEFAULT_ASSET_VERSION
    transformations: list[dict[str, object]] = field(default_factory=list)
    public_id: str = ""

    @property
    def is_valid(self) -> bool:
        """Whether the locator carries a usable public id."""
        return bool(self.public_id)

    def require_public_id(self) -> str:
        """Return the public id, or raise if the path yielded none.

        Raises:
            MalformedLocatorPath: If ``public_id`` is empty.
        """
        if not self.public_id:
            msg = "Legacy path yielded an empty public id"
            raise MalformedLocatorPath(msg)
        return self.public_id

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict."""
        return {
            "cloud_token": self.cloud_token,
            "version": self.version,
            "transformations": [dict(t) for t in self.transformations],
            "public_id": self.public_id,
        }
