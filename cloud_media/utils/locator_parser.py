"""Legacy delivery path parser.

Splits a v1 delivery path into cloud token, asset version, transformation
set, and public id.  The order of optional segments is not fixed, so every
segment is classified independently with a fixed precedence:

1. First non-empty segment → cloud token (hashed).
2. ``image`` / ``video`` / ``upload`` → discarded.
3. First recognised transformation segment → transformations.
4. First ``v<digits>`` segment with a positive, at most 19-digit number → version.
5. Anything else → public id part.

A second transformation-like or version-like segment falls through to the
public id.  The parser never raises: an empty ``public_id`` on the result
is the failure signal.
"""

from __future__ import annotations

import hashlib
import logging
import re

from cloud_media.core.constants import DEFAULT_ASSET_VERSION, RESERVED_PATH_TOKENS
from cloud_media.models.locator import (
    LegacyAssetLocator,
    LocatorState,
    SegmentClassification,
    SegmentKind,
)
from cloud_media.utils.transformations import Recognizer, get_transformations_from_string

logger = logging.getLogger("cloud_media.utils.locator_parser")

_VERSION_RE = re.compile(r"v([1-9][0-9]{0,18})")


def hash_cloud_name(cloud_name: str) -> str:
    """Return the opaque token stored in place of a cloud name."""
    return hashlib.md5(cloud_name.encode("utf-8")).hexdigest()  # noqa: S324


def split_path(raw_path: str) -> list[str]:
    """Strip the leading slash, split on ``/``, and drop empty segments."""
    return [segment for segment in raw_path.lstrip("/").split("/") if segment]


def classify_segment(
    segment: str,
    state: LocatorState,
    recognize_transform: Recognizer,
) -> SegmentClassification:
    """Classify one segment against the current parser state.

    The recognizer is only consulted while no transformation set has been
    claimed yet.
    """
    if state.cloud_token is None:
        return SegmentClassification(
            SegmentKind.CLOUD_TOKEN, segment, cloud_token=hash_cloud_name(segment)
        )

    if segment in RESERVED_PATH_TOKENS:
        return SegmentClassification(SegmentKind.RESERVED, segment)

    if state.transformations is None:
        transformations = recognize_transform(segment)
        if transformations:
            return SegmentClassification(
                SegmentKind.TRANSFORMATION, segment, transformations=list(transformations)
            )

    if state.version is None:
        match = _VERSION_RE.fullmatch(segment)
        if match is not None:
            return SegmentClassification(
                SegmentKind.VERSION, segment, version=int(match.group(1))
            )

    return SegmentClassification(SegmentKind.PUBLIC_ID, segment)


def strip_extension(public_id: str) -> str:
    """Remove the extension from the last path component only.

    A final component without a stem (``".jpg"``) is kept as is.
    """
    head, sep, last = public_id.rpartition("/")
    stem, dot, _ext = last.rpartition(".")
    if not dot or not stem:
        return public_id
    return f"{head}{sep}{stem}"


def parse_legacy_path(
    raw_path: str,
    recognize_transform: Recognizer = get_transformations_from_string,
) -> LegacyAssetLocator:
    """Parse a legacy delivery path into a ``LegacyAssetLocator``.

    Args:
        raw_path: URL path component, e.g.
            ``"/demo/image/upload/w_200/v1617000000/folder/photo.jpg"``.
        recognize_transform: Returns the decoded transformation set for a
            segment, or an empty list when the segment is not one.

    Returns:
        The parsed locator.  ``public_id`` is empty when no identifying
        segments remain; callers must treat that as a data error.
    """
    state = LocatorState()
    for segment in split_path(raw_path):
        result = classify_segment(segment, state, recognize_transform)
        logger.debug("Segment classified | segment=%s | kind=%s", segment, result.kind.value)
        state = state.apply(result)

    return LegacyAssetLocator(
        cloud_token=state.cloud_token or "",
        version=state.version if state.version is not None else DEFAULT_ASSET_VERSION,
        transformations=list(state.transformations or []),
        public_id=strip_extension("/".join(state.public_id_parts)),
    )
