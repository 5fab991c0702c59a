"""Asset URL resolution."""

from .resolver import (
    AssetTransform,
    build_srcset,
    is_resolved,
    resolve_asset_url,
    responsive_image_set,
)

__all__ = [
    "AssetTransform",
    "build_srcset",
    "is_resolved",
    "resolve_asset_url",
    "responsive_image_set",
]
