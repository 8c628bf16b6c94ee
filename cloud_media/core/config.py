"""Runtime configuration loaded from environment variables.

All configuration values have sensible defaults.  Host app settings are
the source of truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is empty
    or malformed.  This catches bad configuration at startup instead of
    on the first gallery render or attachment upgrade.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from cloud_media import __version__
from cloud_media.core.constants import DEFAULT_GALLERY_CONTAINER
from cloud_media.core.exceptions import MediaError


class ConfigValidationError(MediaError):
    """Raised when configuration values are invalid.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class MediaConfig:
    """Immutable runtime configuration.

    Attributes:
        plugin_version: Version string stamped on every upgraded attachment.
        gallery_container: CSS selector the gallery widget renders into.
        metadata_container: Blob container holding attachment metadata.
        metadata_prefix: Blob path prefix for attachment metadata documents.
    """

    plugin_version: str = __version__
    gallery_container: str = DEFAULT_GALLERY_CONTAINER
    metadata_container: str = "attachment-metadata"
    metadata_prefix: str = "attachments"

    @classmethod
    def from_env(cls) -> MediaConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is empty or malformed.
        """
        config = cls(
            plugin_version=os.getenv("PLUGIN_VERSION", __version__),
            gallery_container=os.getenv("GALLERY_CONTAINER", DEFAULT_GALLERY_CONTAINER),
            metadata_container=os.getenv("METADATA_CONTAINER", "attachment-metadata"),
            metadata_prefix=os.getenv("METADATA_PREFIX", "attachments"),
        )
        _validate(config)
        return config


def _validate(config: MediaConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    if not config.plugin_version.strip():
        raise ConfigValidationError(
            "PLUGIN_VERSION",
            config.plugin_version,
            "must not be empty",
        )

    if not config.gallery_container.strip():
        raise ConfigValidationError(
            "GALLERY_CONTAINER",
            config.gallery_container,
            "must not be empty",
        )

    if not config.metadata_container:
        raise ConfigValidationError(
            "METADATA_CONTAINER",
            config.metadata_container,
            "must not be empty",
        )

    if config.metadata_prefix.startswith("/") or config.metadata_prefix.endswith("/"):
        raise ConfigValidationError(
            "METADATA_PREFIX",
            config.metadata_prefix,
            "must not start or end with '/'",
        )
