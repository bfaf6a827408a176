from __future__ import annotations

import pytest

from movie_monday_insights.preprocess.lists import normalize_list_field


def test_normalize_list_field_unwraps_json_encoded_elements() -> None:
    assert normalize_list_field(['["Tacos"]']) == ["Tacos"]
    assert normalize_list_field('["Tacos", "Nachos"]') == ["Tacos", "Nachos"]


def test_normalize_list_field_handles_empty_and_malformed_encodings() -> None:
    assert normalize_list_field("[]") == []
    assert normalize_list_field(["[]"]) == []
    assert normalize_list_field("[,]") == ["None"]
    assert normalize_list_field("[1, 2]") == ["None"]
    assert normalize_list_field('[Old Fashioned, ]') == ["Old Fashioned"]


def test_normalize_list_field_trims_and_drops_empty_items() -> None:
    assert normalize_list_field(["  Margarita ", "", "   ", "Mojito"]) == ["Margarita", "Mojito"]
    assert normalize_list_field("  Pizza  ") == ["Pizza"]
    assert normalize_list_field("   ") == []


def test_normalize_list_field_ignores_non_list_values() -> None:
    assert normalize_list_field(None) == []
    assert normalize_list_field(42) == []
    assert normalize_list_field({"meal": "Tacos"}) == []
    assert normalize_list_field(["Tacos", 7, None]) == ["Tacos"]


@pytest.mark.parametrize(
    "raw",
    [
        ['["Tacos"]', "Chili"],
        "[,]",
        "[]",
        '[["Pad Thai"]]',
        '["[\\"Ramen\\"]"]',
        ["[Bad, ]", "  Soup "],
        "Burgers",
    ],
)
def test_normalize_list_field_is_idempotent(raw: object) -> None:
    once = normalize_list_field(raw)
    assert normalize_list_field(once) == once
