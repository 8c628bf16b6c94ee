"""Tests for the locator and upgrade record models."""

from __future__ import annotations

import json

import pydantic
import pytest

from cloud_media.core.constants import META_KEYS
from cloud_media.core.exceptions import MalformedLocatorPath
from cloud_media.models.locator import LegacyAssetLocator
from cloud_media.models.upgrade import UpgradeRecord


class TestLegacyAssetLocator:
    def test_defaults(self) -> None:
        locator = LegacyAssetLocator()
        assert locator.version == 1
        assert locator.transformations == []
        assert locator.is_valid is False

    def test_to_dict(self) -> None:
        locator = LegacyAssetLocator("tok", 3, [{"w": 1}], "a/b")
        assert locator.to_dict() == {
            "cloud_token": "tok",
            "version": 3,
            "transformations": [{"w": 1}],
            "public_id": "a/b",
        }

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            LegacyAssetLocator().public_id = "x"  # type: ignore[misc]


class TestUpgradeRecord:
    def test_from_locator(self) -> None:
        locator = LegacyAssetLocator("tok", 9, [{"w": 1}], "a/b")
        record = UpgradeRecord.from_locator(locator, plugin_version="2.0")
        assert record.public_id == "a/b"
        assert record.version == 9
        assert record.transformation == [{"w": 1}]
        assert record.plugin_version == "2.0"
        assert record.cloud_token == "tok"

    def test_from_locator_without_public_id(self) -> None:
        with pytest.raises(MalformedLocatorPath):
            UpgradeRecord.from_locator(LegacyAssetLocator("tok"), plugin_version="2.0")

    def test_to_meta(self) -> None:
        record = UpgradeRecord(public_id="a", version=2, transformation=[{"h": 5}])
        assert record.to_meta() == {
            META_KEYS["public_id"]: "a",
            META_KEYS["version"]: 2,
            META_KEYS["transformation"]: [{"h": 5}],
        }

    def test_to_meta_omits_empty_transformation(self) -> None:
        assert META_KEYS["transformation"] not in UpgradeRecord(public_id="a").to_meta()

    def test_negative_version_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            UpgradeRecord(public_id="a", version=-1)

    def test_zero_version_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            UpgradeRecord(public_id="a", version=0)

    def test_to_json(self) -> None:
        payload = json.loads(UpgradeRecord(public_id="a", plugin_version="2").to_json())
        assert payload["public_id"] == "a"
        assert payload["version"] == 1
