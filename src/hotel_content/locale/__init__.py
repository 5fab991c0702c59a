"""Translation overlay resolution."""

from .resolver import (
    METADATA_KEYS,
    overlay_translation,
    owner_key,
    resolve_locale,
    select_translation,
    translation_locale,
)

__all__ = [
    "METADATA_KEYS",
    "overlay_translation",
    "owner_key",
    "resolve_locale",
    "select_translation",
    "translation_locale",
]
