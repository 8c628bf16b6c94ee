"""Tests for the default transformation recognizer."""

from __future__ import annotations

import pytest

from cloud_media.utils.transformations import get_transformations_from_string


class TestGetTransformationsFromString:
    def test_width_height(self) -> None:
        assert get_transformations_from_string("w_200,h_200") == [{"w": 200, "h": 200}]

    def test_string_and_float_values(self) -> None:
        assert get_transformations_from_string("c_fill,q_auto,dpr_2.0") == [
            {"c": "fill", "q": "auto", "dpr": 2.0}
        ]

    def test_effect_with_colon_value(self) -> None:
        assert get_transformations_from_string("e_blur:300") == [{"e": "blur:300"}]

    def test_user_variable(self) -> None:
        assert get_transformations_from_string("$size_40,w_$size") == [
            {"$size": 40, "w": "$size"}
        ]

    @pytest.mark.parametrize(
        "segment",
        [
            "",
            "photo.jpg",
            "folder",
            "v1617000000",
            "my_photo",
            "w_200,photo",
            "w_",
            "upload",
            "a/b",
        ],
    )
    def test_not_a_transformation(self, segment: str) -> None:
        assert get_transformations_from_string(segment) == []

    def test_overlong_integer_stays_string(self) -> None:
        value = "9" * 5000
        assert get_transformations_from_string(f"w_{value}") == [{"w": value}]

    def test_overlong_decimal_stays_string(self) -> None:
        value = "1." + "5" * 5000
        assert get_transformations_from_string(f"dpr_{value}") == [{"dpr": value}]

    def test_non_ascii_digits_stay_string(self) -> None:
        assert get_transformations_from_string("w_\u0661\u0662") == [{"w": "\u0661\u0662"}]

    def test_trailing_newline_not_a_transformation(self) -> None:
        assert get_transformations_from_string("w_200\n") == []
