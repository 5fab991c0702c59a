from __future__ import annotations

from types import MappingProxyType

from hotel_content.locale import resolve_locale, select_translation


def _item() -> dict:
    return {
        "id": "hotel-1",
        "title": "Base",
        "description": "Base description",
        "translations": [
            {"id": 11, "locale": "en-US", "title": "A", "item": "hotel-1"},
            {"id": 12, "locale": "de-DE", "title": "B", "item": "hotel-1"},
        ],
    }


def test_requested_locale_wins():
    assert resolve_locale(_item(), "de-DE")["title"] == "B"


def test_fallback_locale_is_used_when_requested_is_missing():
    assert resolve_locale(_item(), "fr-FR", "en-US")["title"] == "A"


def test_missing_locale_without_fallback_leaves_item_unchanged():
    item = _item()
    resolved = resolve_locale(item, "fr-FR")
    assert resolved["title"] == "Base"
    assert resolved is item


def test_null_translation_values_do_not_clobber():
    item = {
        "id": 1,
        "description": "Keep me",
        "translations": [{"languages_code": "de-DE", "description": None, "title": "Titel"}],
    }
    resolved = resolve_locale(item, "de-DE")
    assert resolved["description"] == "Keep me"
    assert resolved["title"] == "Titel"


def test_metadata_fields_are_never_copied():
    item = {
        "id": "hotel-1",
        "translations": [
            {
                "id": 99,
                "languages_code": "de-DE",
                "languages_id": "de-DE",
                "item": "hotel-1",
                "metadata": {"rev": 3},
                "name": "Hotel Sonne",
            }
        ],
    }
    resolved = resolve_locale(item, "de-DE")
    assert resolved["id"] == "hotel-1"
    assert resolved["name"] == "Hotel Sonne"
    for key in ("languages_code", "languages_id", "item", "metadata"):
        assert key not in resolved


def test_expanded_language_relation_is_matched():
    item = {"id": 1, "translations": [{"languages_code": {"code": "he-IL"}, "name": "מלון"}]}
    assert resolve_locale(item, "he-IL")["name"] == "מלון"


def test_single_record_applies_only_to_its_locale():
    item = {"id": 1, "name": "Base", "translations": {"languages_code": "en-US", "name": "English"}}
    assert resolve_locale(item, "en-US")["name"] == "English"
    assert resolve_locale(item, "de-DE")["name"] == "Base"


def test_single_record_honours_fallback():
    item = {"id": 1, "name": "Base", "translations": {"languages_code": "en-US", "name": "English"}}
    assert resolve_locale(item, "de-DE", "en-US")["name"] == "English"


def test_untagged_single_record_is_applied():
    item = {"id": 1, "name": "Base", "translations": {"name": "Server filtered"}}
    assert resolve_locale(item, "de-DE")["name"] == "Server filtered"


def test_absent_or_empty_translations_are_noops():
    for translations in (None, [], {}):
        item = {"id": 1, "name": "Base", "translations": translations}
        assert resolve_locale(item, "de-DE") is item
    bare = {"id": 1, "name": "Base"}
    assert resolve_locale(bare, "de-DE") is bare
    assert resolve_locale(None, "de-DE") is None


def test_fields_restrict_overlay():
    item = {
        "id": 1,
        "name": "Base",
        "description": "Base text",
        "translations": [{"languages_code": "de-DE", "name": "Name", "description": "Text"}],
    }
    resolved = resolve_locale(item, "de-DE", fields=["name"])
    assert resolved["name"] == "Name"
    assert resolved["description"] == "Base text"


def test_input_is_not_mutated():
    source = _item()
    frozen = MappingProxyType(source)
    resolved = resolve_locale(frozen, "de-DE")
    assert resolved is not frozen
    assert source["title"] == "Base"
    assert resolved["title"] == "B"


def test_select_translation_handles_non_sequences():
    assert select_translation("de-DE", "de-DE") is None
    assert select_translation(42, "de-DE") is None


def test_parent_reference_is_never_copied():
    item = {
        "id": "h1",
        "name": "Base",
        "destination_id": "d-1",
        "translations": [
            {"id": 4, "hotels_id": "h1", "destination_id": "d-9", "languages_code": "de-DE", "name": "DE"}
        ],
    }
    resolved = resolve_locale(item, "de-DE")
    assert "hotels_id" not in resolved
    assert resolved["name"] == "DE"
    assert resolved["id"] == "h1"
    assert resolved["destination_id"] == "d-9"


def test_collection_names_the_parent_reference():
    item = {
        "name": "Base",
        "translations": [{"languages_code": "de-DE", "rooms_id": {"id": 12}, "name": "Zimmer"}],
    }
    resolved = resolve_locale(item, "de-DE", collection="rooms")
    assert "rooms_id" not in resolved
    assert resolved["name"] == "Zimmer"
    assert "rooms_id" in resolve_locale(item, "de-DE")
