from __future__ import annotations

import copy
from types import MappingProxyType

from hotel_content.items import normalize_item, normalize_items

CMS = "https://cms.example.com"


def test_gallery_entries_gain_urls():
    result = normalize_item({"id": 1, "gallery": [{"image": "x"}]}, "de-DE", ["gallery"], base_url=CMS)
    entry = result["gallery"][0]
    assert entry["url"].endswith("/assets/x")
    assert entry["image"] == "x"


def test_gallery_strings_are_wrapped_and_unknown_entries_kept():
    result = normalize_item(
        {"id": 1, "gallery": ["img-1", "/images/local.jpg", {"alt": "no image"}]},
        "de-DE",
        ["gallery"],
        base_url=CMS,
    )
    assert result["gallery"][0] == {"id": "img-1", "url": f"{CMS}/assets/img-1"}
    assert result["gallery"][1] == {"id": "/images/local.jpg", "url": "/images/local.jpg"}
    assert result["gallery"][2] == {"alt": "no image"}


def test_singular_image_fields_get_sibling_url():
    item = {"id": 1, "main_image": {"id": "file-9", "title": "Lobby"}, "image": "file-3"}
    result = normalize_item(item, "de-DE", ["main_image", "image"], base_url=CMS)
    assert result["main_image"] == {"id": "file-9", "title": "Lobby"}
    assert result["main_image_url"] == f"{CMS}/assets/file-9"
    assert result["image"] == "file-3"
    assert result["image_url"] == f"{CMS}/assets/file-3"


def test_missing_image_fields_are_skipped():
    result = normalize_item({"id": 1, "main_image": None}, "de-DE", ["main_image", "gallery"], base_url=CMS)
    assert "main_image_url" not in result
    assert "gallery" not in result


def test_translations_are_applied_before_images():
    item = {
        "id": 1,
        "name": "Hotel",
        "main_image": "base-image",
        "translations": [{"languages_code": "en-US", "name": "Hotel EN", "main_image": "en-image"}],
    }
    result = normalize_item(item, "en-US", ["main_image"], base_url=CMS)
    assert result["name"] == "Hotel EN"
    assert result["main_image_url"] == f"{CMS}/assets/en-image"

    fallback = normalize_item(item, "ar-AE", ["main_image"], base_url=CMS, fallback_locale="en-US")
    assert fallback["name"] == "Hotel EN"


def test_dotted_image_fields_descend_into_relations():
    item = {
        "id": "dest-1",
        "highlights": [{"title": "Lake", "image": "h-1"}, {"title": "Peak", "image": None}],
        "activities": {"title": "Skiing", "image": {"id": "a-1"}},
    }
    result = normalize_item(item, "de-DE", ["highlights.image", "activities.image"], base_url=CMS)
    assert result["highlights"][0]["image_url"] == f"{CMS}/assets/h-1"
    assert "image_url" not in result["highlights"][1]
    assert result["activities"]["image_url"] == f"{CMS}/assets/a-1"
    assert "image_url" not in item["highlights"][0]


def test_none_input_is_safe():
    assert normalize_item(None, "de-DE", ["main_image"], base_url=CMS) is None
    assert normalize_items(None, "de-DE", base_url=CMS) == []
    assert normalize_items([None, {"id": 1}], "de-DE", base_url=CMS) == [{"id": 1}]


def test_normalize_is_pure_and_repeatable():
    item = {
        "id": 1,
        "name": "Hotel",
        "main_image": "file-1",
        "gallery": [{"image": "g-1", "alt": "Pool"}],
        "translations": [{"languages_code": "de-DE", "name": "Hotel DE"}],
    }
    snapshot = copy.deepcopy(item)

    first = normalize_item(item, "de-DE", ["main_image", "gallery"], base_url=CMS)
    second = normalize_item(item, "de-DE", ["main_image", "gallery"], base_url=CMS)

    assert first == second
    assert first is not item
    assert first is not second
    assert item == snapshot
    assert first["gallery"][0] is not item["gallery"][0]


def test_frozen_input_is_never_written():
    frozen = MappingProxyType(
        {
            "id": 1,
            "name": "Hotel",
            "main_image": MappingProxyType({"id": "file-1"}),
            "gallery": (MappingProxyType({"image": "g-1"}), "g-2"),
            "highlights": (MappingProxyType({"image": "h-1"}),),
            "translations": (MappingProxyType({"languages_code": "en-US", "name": "Hotel EN"}),),
        }
    )
    result = normalize_item(
        frozen,
        "en-US",
        ["main_image", "gallery", "highlights.image"],
        base_url=CMS,
    )
    assert result["name"] == "Hotel EN"
    assert result["main_image_url"] == f"{CMS}/assets/file-1"
    assert [entry["url"] for entry in result["gallery"]] == [f"{CMS}/assets/g-1", f"{CMS}/assets/g-2"]
    assert result["highlights"][0]["image_url"] == f"{CMS}/assets/h-1"
    assert frozen["name"] == "Hotel"
    assert "main_image_url" not in frozen


def test_normalize_items_keeps_order():
    items = [{"id": 2, "main_image": "b"}, {"id": 1, "main_image": "a"}]
    result = normalize_items(items, "de-DE", ["main_image"], base_url=CMS)
    assert [entry["id"] for entry in result] == [2, 1]
    assert result[1]["main_image_url"] == f"{CMS}/assets/a"


def test_non_mapping_entries_are_dropped():
    assert normalize_items([5, "x", None, {"id": 1}], "de-DE", base_url=CMS) == [{"id": 1}]
    assert normalize_items(5, "de-DE", base_url=CMS) == []
    assert normalize_items("unexpected", "de-DE", base_url=CMS) == []
    assert normalize_item(7, "de-DE", base_url=CMS) is None


def test_collection_reference_is_stripped_during_normalisation():
    item = {"id": 3, "translations": [{"languages_code": "en-US", "pages_id": 3, "title": "About"}]}
    result = normalize_item(item, "en-US", base_url=CMS, collection="pages")
    assert result == {"id": 3, "title": "About", "translations": item["translations"]}
