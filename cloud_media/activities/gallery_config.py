"""Gallery config activity: assemble the product-gallery widget config.

Pipeline:
1. Strip control-only keys (``enable_gallery``, ``custom_settings``).
2. Normalize the remaining flat settings (see ``config_normalizer``).
3. Inject ``cloudName``, ``container`` and an empty ``mediaAssets`` list.
4. Shallow-merge the user's custom JSON object over the result.

``GalleryConfigAssembler`` memoizes the assembled document for its own
lifetime (one request or process).  The result is shared: callers must
treat it as read-only.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from cloud_media.core.constants import (
    CUSTOM_SETTINGS_KEYS,
    DEFAULT_GALLERY_CONTAINER,
    GALLERY_CONTROL_KEYS,
)
from cloud_media.core.exceptions import InvalidCustomConfigJson, LookupFailure, MediaError
from cloud_media.utils.config_normalizer import ConfigDocument, normalize
from cloud_media.utils.write_once import WriteOnce

logger = logging.getLogger("cloud_media.activities.gallery_config")

_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def parse_custom_config(custom_json: str | None) -> ConfigDocument:
    """Parse the user override.  Blank input means no override.

    Raises:
        InvalidCustomConfigJson: If the text is not a JSON object.
    """
    if custom_json is None or not custom_json.strip():
        return {}
    try:
        parsed = json.loads(custom_json)
    except ValueError as exc:
        msg = f"Custom gallery settings are not valid JSON: {exc}"
        raise InvalidCustomConfigJson(msg) from exc
    if not isinstance(parsed, dict):
        msg = f"Custom gallery settings must be a JSON object, got {type(parsed).__name__}"
        raise InvalidCustomConfigJson(msg)
    return parsed


def assemble(
    base_flat_config: Mapping[str, Any],
    cloud_identifier: str,
    custom_json: str | None = None,
    *,
    container: str = DEFAULT_GALLERY_CONTAINER,
) -> ConfigDocument:
    """Build the gallery widget configuration document.

    The custom overlay is parsed before anything is assembled, so a
    malformed overlay never yields a partial document.

    Args:
        base_flat_config: Flat gallery settings.
        cloud_identifier: Resolved cloud name.
        custom_json: Raw JSON object text; top-level keys replace computed ones.
        container: CSS selector the widget renders into.

    Raises:
        InvalidCustomConfigJson: If ``custom_json`` is malformed.
        InvalidConfigValue: If a settings value is a non-finite float.
        LookupFailure: If ``cloud_identifier`` is empty.
    """
    if not cloud_identifier:
        msg = "Cloud identifier is empty"
        raise LookupFailure(msg)

    custom = parse_custom_config(custom_json)

    settings = {k: v for k, v in base_flat_config.items() if k not in GALLERY_CONTROL_KEYS}
    config = normalize(settings)
    config["cloudName"] = cloud_identifier
    config["container"] = container
    config["mediaAssets"] = []

    return {**config, **custom}


def to_script_json(document: Mapping[str, Any]) -> str:
    """Compact JSON safe to embed verbatim inside a ``<script>`` element."""
    text = json.dumps(document, separators=(",", ":"))
    for char, escaped in _SCRIPT_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


class GalleryConfigAssembler:
    """Per-request gallery configuration with write-once memoization.

    Args:
        settings: Flat gallery settings, including control keys.  The raw
            override is read from ``custom_settings``.
        cloud_name_lookup: Resolves the cloud name.  Errors propagate as
            ``LookupFailure``.
        container: CSS selector the widget renders into.
    """

    def __init__(
        self,
        settings: Mapping[str, Any],
        cloud_name_lookup: Callable[[], str],
        *,
        container: str = DEFAULT_GALLERY_CONTAINER,
    ) -> None:
        self._settings = dict(settings)
        self._cloud_name_lookup = cloud_name_lookup
        self._container = container
        self._config: WriteOnce[ConfigDocument] = WriteOnce()

    @property
    def is_computed(self) -> bool:
        return self._config.is_set

    def _custom_json(self) -> str | None:
        for key in CUSTOM_SETTINGS_KEYS:
            value = self._settings.get(key)
            if value is None or value == "":
                continue
            if not isinstance(value, str):
                msg = (
                    f"Custom gallery settings under {key!r} must be raw JSON text, "
                    f"got {type(value).__name__}"
                )
                raise InvalidCustomConfigJson(msg)
            return value
        return None

    def _resolve_cloud_name(self) -> str:
        try:
            cloud_name = self._cloud_name_lookup()
        except MediaError as exc:
            msg = f"Cloud name lookup failed: {exc.message}"
            raise LookupFailure(msg, retryable=exc.retryable) from exc
        except Exception as exc:
            msg = f"Cloud name lookup failed: {exc}"
            raise LookupFailure(msg) from exc
        if not cloud_name:
            msg = "Cloud name lookup returned an empty value"
            raise LookupFailure(msg)
        return cloud_name

    def _compute(self) -> ConfigDocument:
        config = assemble(
            self._settings,
            self._resolve_cloud_name(),
            self._custom_json(),
            container=self._container,
        )
        logger.info(
            "Gallery config assembled | keys=%d | container=%s",
            len(config),
            config.get("container", ""),
        )
        return config

    def get_config(self) -> ConfigDocument:
        """Return the assembled document, computing it on first call.

        Raises:
            LookupFailure: If the cloud name cannot be resolved.
            InvalidCustomConfigJson: If the custom override is malformed.
            InvalidConfigValue: If a settings value is a non-finite float.
        """
        return self._config.get_or_compute(self._compute)

    def to_json(self) -> str:
        """Compact JSON of the memoized document."""
        return json.dumps(self.get_config(), separators=(",", ":"))

    def to_script_json(self) -> str:
        """Script-safe JSON literal of the memoized document."""
        return to_script_json(self.get_config())
