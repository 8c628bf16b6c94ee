"""Shared constants: single source of truth.

Centralises reserved path tokens, metadata keys, and widget defaults
used by the upgrade activity and the gallery assembler.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Legacy delivery paths
# ---------------------------------------------------------------------------

RESERVED_PATH_TOKENS: frozenset[str] = frozenset({"image", "video", "upload"})
"""Resource/delivery-type segments discarded while parsing a legacy path."""

DEFAULT_ASSET_VERSION: int = 1
"""Version assumed when a legacy path carries no ``v<digits>`` segment."""

ALLOWED_URL_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# ---------------------------------------------------------------------------
# Attachment metadata keys
# ---------------------------------------------------------------------------

META_KEYS: dict[str, str] = {
    "public_id": "_public_id",
    "version": "_cloudinary_version",
    "transformation": "_transformations",
    "plugin_version": "_plugin_version",
}
"""Field name → storage key for persisted attachment metadata."""

SIGNATURE_CLOUD_NAME = "cloud_name"
SIGNATURE_UPGRADE = "upgrade"
SIGNATURE_PUBLIC_ID = "public_id"

# ---------------------------------------------------------------------------
# Gallery widget
# ---------------------------------------------------------------------------

DEFAULT_GALLERY_CONTAINER: str = ".woocommerce-product-gallery"
"""CSS selector the gallery widget renders into."""

GALLERY_CONTROL_KEYS: frozenset[str] = frozenset(
    {"enable_gallery", "enableGallery", "custom_settings", "customSettings"}
)
"""Directive keys stripped from gallery settings before normalization."""

CUSTOM_SETTINGS_KEYS: tuple[str, ...] = ("custom_settings", "customSettings")
