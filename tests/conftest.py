"""Shared pytest fixtures for the cloud_media test suite."""

from __future__ import annotations

import pytest

from cloud_media.stores.memory import InMemoryMetadataStore

# ---------------------------------------------------------------------------
# Legacy delivery URLs
# ---------------------------------------------------------------------------

LEGACY_HOST = "https://res.cloudinary.com"


@pytest.fixture()
def legacy_url() -> str:
    """A full v1 delivery URL with transformation and version."""
    return f"{LEGACY_HOST}/abc123/image/upload/w_200,h_200/v1617000000/folder/photo.jpg"


@pytest.fixture()
def bare_legacy_url() -> str:
    """A v1 delivery URL with neither transformation nor version."""
    return f"{LEGACY_HOST}/abc123/image/upload/folder/photo.jpg"


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture()
def memory_store() -> InMemoryMetadataStore:
    """An empty in-memory attachment metadata store."""
    return InMemoryMetadataStore()


# ---------------------------------------------------------------------------
# Gallery settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def gallery_settings() -> dict[str, object]:
    """Flat gallery settings as saved by the settings page."""
    return {
        "enable_gallery": "on",
        "custom_settings": "",
        "show_arrows": "on",
        "show_zoom": "off",
        "aspect_ratio": "square",
        "thumbnail_props.width": "100",
        "thumbnail_props.height": "75",
        "thumbnail_props.navigation_shape": "none",
        "carousel_location": "none",
        "zoom_props.level": "",
    }
