"""Overlay locale-specific translation records onto CMS items."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

TRANSLATIONS_FIELD = "translations"
LOCALE_KEYS: tuple[str, ...] = ("languages_code", "languages_id", "locale")
# Locale, ownership and bookkeeping keys that never land on the base item.
METADATA_KEYS: frozenset[str] = frozenset({"id", "item", "metadata", *LOCALE_KEYS})


def translation_locale(record: Mapping[str, Any]) -> Optional[str]:
    for key in LOCALE_KEYS:
        value = record.get(key)
        if isinstance(value, Mapping):
            # Expanded relation, e.g. ``languages_code.*``.
            value = value.get("code")
        if value:
            return str(value)
    return None


def _find(records: Iterable[Any], locale: str) -> Optional[Mapping[str, Any]]:
    for record in records:
        if isinstance(record, Mapping) and translation_locale(record) == locale:
            return record
    return None


def select_translation(
    translations: Any,
    requested_locale: str,
    fallback_locale: Optional[str] = None,
) -> Optional[Mapping[str, Any]]:
    """Pick the translation record to apply, or ``None``.

    A list is searched for the requested locale, then the fallback locale. A
    single record applies when its tag matches either locale; an untagged single
    record was already narrowed by a deep filter and is applied as-is.
    """
    if not translations:
        return None
    if isinstance(translations, Mapping):
        tag = translation_locale(translations)
        if tag is None or tag == requested_locale:
            return translations
        if fallback_locale and tag == fallback_locale:
            return translations
        return None
    if isinstance(translations, (str, bytes)) or not isinstance(translations, Sequence):
        return None
    match = _find(translations, requested_locale)
    if match is None and fallback_locale:
        match = _find(translations, fallback_locale)
    return match


def owner_key(collection: Optional[str]) -> Optional[str]:
    """Name of the parent reference in a translation record, e.g. ``hotels_id``."""
    return f"{collection}_id" if collection else None


def _is_owner_reference(key: str, value: Any, item: Mapping[str, Any], owner: Optional[str]) -> bool:
    if key == owner:
        return True
    if not key.endswith("_id") or key in LOCALE_KEYS:
        return False
    if isinstance(value, Mapping):
        value = value.get("id")
    return value is not None and value == item.get("id")


def overlay_translation(
    item: Mapping[str, Any],
    translation: Mapping[str, Any],
    fields: Optional[Iterable[str]] = None,
    *,
    owner: Optional[str] = None,
) -> Dict[str, Any]:
    """Copy translated values onto a new dict.

    Metadata keys and the parent reference (``owner``, or any ``*_id`` key
    pointing back at ``item["id"]``) are skipped.
    """
    resolved = dict(item)
    keys = list(fields) if fields else [key for key in translation if key not in METADATA_KEYS]
    for key in keys:
        if key in METADATA_KEYS or _is_owner_reference(key, translation.get(key), item, owner):
            continue
        value = translation.get(key)
        if value is not None:
            resolved[key] = value
    return resolved


def resolve_locale(
    item: Optional[Mapping[str, Any]],
    requested_locale: str,
    fallback_locale: Optional[str] = None,
    *,
    fields: Optional[Iterable[str]] = None,
    collection: Optional[str] = None,
) -> Optional[Mapping[str, Any]]:
    """Return ``item`` with the matching translation overlaid.

    Only non-``None`` translation values replace base values and ``id`` is never
    overwritten. When no translation applies the input is returned unchanged;
    otherwise a new dict is returned and the input is left untouched. ``fields``
    restricts the overlay to the named keys; ``collection`` names the parent
    collection so its ``<collection>_id`` reference is never copied.
    """
    if item is None:
        return None
    translation = select_translation(item.get(TRANSLATIONS_FIELD), requested_locale, fallback_locale)
    if translation is None:
        return item
    return overlay_translation(item, translation, fields, owner=owner_key(collection))
