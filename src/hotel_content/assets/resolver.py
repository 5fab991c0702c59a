"""Build asset URLs for CMS file identifiers."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import urlencode

DEFAULT_QUALITY = 80
DEFAULT_FORMAT = "webp"
DEFAULT_FIT = "cover"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


@dataclass(frozen=True)
class AssetTransform:
    """Server-side image derivation options."""

    width: Optional[int] = None
    height: Optional[int] = None
    quality: Optional[int] = None
    format: Optional[str] = None
    fit: Optional[str] = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.to_dict().values())

    def to_params(self) -> list[tuple[str, str]]:
        """Query parameters; quality, format and fit get defaults once anything is requested."""
        if self.is_empty():
            return []
        params: list[tuple[str, str]] = []
        if self.width:
            params.append(("width", str(self.width)))
        if self.height:
            params.append(("height", str(self.height)))
        params.append(("quality", str(self.quality or DEFAULT_QUALITY)))
        params.append(("format", self.format or DEFAULT_FORMAT))
        params.append(("fit", self.fit or DEFAULT_FIT))
        return params

    def to_dict(self) -> dict[str, object]:
        return {
            "width": self.width,
            "height": self.height,
            "quality": self.quality,
            "format": self.format,
            "fit": self.fit,
        }


def is_resolved(identifier: str) -> bool:
    """True when ``identifier`` is already an absolute path or URL."""
    return identifier.startswith("/") or bool(_SCHEME_RE.match(identifier))


def _coerce_identifier(identifier: Any) -> str:
    if identifier is None:
        return ""
    if isinstance(identifier, Mapping):
        return _coerce_identifier(identifier.get("id"))
    return str(identifier).strip()


def _coerce_transform(transform: Any) -> AssetTransform:
    if transform is None:
        return AssetTransform()
    if isinstance(transform, AssetTransform):
        return transform
    if isinstance(transform, Mapping):
        known = {key: transform.get(key) for key in ("width", "height", "quality", "format", "fit")}
        return AssetTransform(**known)
    raise TypeError("transform must be an AssetTransform or a mapping")


def resolve_asset_url(
    identifier: Any,
    transform: AssetTransform | Mapping[str, Any] | None = None,
    *,
    base_url: str,
) -> str:
    """Return the asset URL for ``identifier``.

    Empty identifiers yield ``""``. Identifiers that already start with ``/`` or a
    URL scheme are returned unchanged and ``transform`` is ignored, which also
    makes the function idempotent over its own output.
    """
    value = _coerce_identifier(identifier)
    if not value:
        return ""
    if is_resolved(value):
        return value
    url = f"{base_url.rstrip('/')}/assets/{value}"
    params = _coerce_transform(transform).to_params()
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def responsive_image_set(
    identifier: Any,
    sizes: Iterable[AssetTransform | Mapping[str, Any]],
    *,
    base_url: str,
) -> List[dict[str, Any]]:
    """Resolve one URL per size, keeping the size options next to each URL."""
    entries: List[dict[str, Any]] = []
    for size in sizes:
        transform = _coerce_transform(size)
        options = {key: value for key, value in transform.to_dict().items() if value is not None}
        entries.append({**options, "url": resolve_asset_url(identifier, transform, base_url=base_url)})
    return entries


def build_srcset(
    identifier: Any,
    widths: Iterable[int],
    *,
    base_url: str,
    transform: AssetTransform | None = None,
) -> str:
    value = _coerce_identifier(identifier)
    if not value:
        return ""
    if is_resolved(value):
        return value
    base = transform or AssetTransform()
    candidates = []
    for width in widths:
        sized = AssetTransform(
            width=width,
            height=base.height,
            quality=base.quality,
            format=base.format,
            fit=base.fit,
        )
        candidates.append(f"{resolve_asset_url(value, sized, base_url=base_url)} {width}w")
    return ", ".join(candidates)
