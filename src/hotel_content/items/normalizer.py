"""Utilities to turn raw CMS items into locale- and asset-resolved mappings."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from hotel_content.assets.resolver import AssetTransform, resolve_asset_url
from hotel_content.locale.resolver import resolve_locale


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _resolve_gallery(
    entries: Sequence[Any],
    *,
    base_url: str,
    transform: Optional[AssetTransform],
) -> List[Any]:
    gallery: List[Any] = []
    for entry in entries:
        if isinstance(entry, Mapping) and entry.get("image"):
            gallery.append({**entry, "url": resolve_asset_url(entry["image"], transform, base_url=base_url)})
        elif isinstance(entry, str):
            gallery.append({"id": entry, "url": resolve_asset_url(entry, transform, base_url=base_url)})
        else:
            gallery.append(entry)
    return gallery


def _resolve_field(
    item: Mapping[str, Any],
    path: Sequence[str],
    *,
    base_url: str,
    transform: Optional[AssetTransform],
) -> Mapping[str, Any]:
    name = path[0]
    value = item.get(name)
    if not value:
        return item

    if len(path) > 1:
        # Dotted path such as ``highlights.image``: descend into the relation.
        if isinstance(value, Mapping):
            nested: Any = _resolve_field(value, path[1:], base_url=base_url, transform=transform)
        elif _is_sequence(value):
            nested = [
                _resolve_field(entry, path[1:], base_url=base_url, transform=transform)
                if isinstance(entry, Mapping)
                else entry
                for entry in value
            ]
        else:
            return item
        return {**item, name: nested}

    if _is_sequence(value):
        return {**item, name: _resolve_gallery(value, base_url=base_url, transform=transform)}
    identifier = value.get("id") if isinstance(value, Mapping) else value
    return {**item, f"{name}_url": resolve_asset_url(identifier, transform, base_url=base_url)}


def resolve_images(
    item: Mapping[str, Any],
    image_fields: Iterable[str],
    *,
    base_url: str,
    transform: Optional[AssetTransform] = None,
) -> Mapping[str, Any]:
    """Attach resolved URLs for each declared image field.

    Gallery lists become ``{..., "url"}`` entries; singular fields keep their raw
    value and gain a ``<field>_url`` sibling.
    """
    resolved = item
    for image_field in image_fields:
        path = [part for part in image_field.split(".") if part]
        if path:
            resolved = _resolve_field(resolved, path, base_url=base_url, transform=transform)
    return resolved


def normalize_item(
    item: Optional[Mapping[str, Any]],
    locale: str,
    image_fields: Iterable[str] = (),
    *,
    base_url: str,
    fallback_locale: Optional[str] = None,
    transform: Optional[AssetTransform] = None,
    collection: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Locale-resolve ``item`` and attach image URLs; non-mapping input yields ``None``."""
    if not isinstance(item, Mapping):
        return None
    localized = resolve_locale(item, locale, fallback_locale, collection=collection)
    return dict(resolve_images(localized, image_fields, base_url=base_url, transform=transform))


def normalize_items(
    items: Optional[Iterable[Any]],
    locale: str,
    image_fields: Iterable[str] = (),
    *,
    base_url: str,
    fallback_locale: Optional[str] = None,
    transform: Optional[AssetTransform] = None,
    collection: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Normalise every mapping in ``items``; ``None`` and non-mapping entries are dropped."""
    if not items or isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        return []
    fields = tuple(image_fields)
    normalized: List[Dict[str, Any]] = []
    for item in items:
        record = normalize_item(
            item,
            locale,
            fields,
            base_url=base_url,
            fallback_locale=fallback_locale,
            transform=transform,
            collection=collection,
        )
        if record is not None:
            normalized.append(record)
    return normalized
