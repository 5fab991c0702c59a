from __future__ import annotations

from hotel_content.assets import AssetTransform, build_srcset, resolve_asset_url, responsive_image_set

CMS = "https://cms.example.com"


def test_resolved_paths_ignore_transforms():
    assert resolve_asset_url("/images/a.jpg", {"width": 200}, base_url=CMS) == "/images/a.jpg"
    remote = "https://images.example.org/hero.jpg"
    assert resolve_asset_url(remote, AssetTransform(width=640), base_url=CMS) == remote


def test_identifier_with_transform_gets_defaults():
    url = resolve_asset_url("abc123", {"width": 200}, base_url=CMS)
    assert "assets/abc123" in url
    assert "width=200" in url
    assert url == f"{CMS}/assets/abc123?width=200&quality=80&format=webp&fit=cover"


def test_identifier_without_transform_is_bare():
    assert resolve_asset_url("abc123", base_url=CMS + "/") == f"{CMS}/assets/abc123"
    assert resolve_asset_url("abc123", AssetTransform(), base_url=CMS) == f"{CMS}/assets/abc123"


def test_explicit_transform_options():
    transform = AssetTransform(width=1200, height=600, quality=60, format="avif", fit="contain")
    url = resolve_asset_url("abc123", transform, base_url=CMS)
    assert url == f"{CMS}/assets/abc123?width=1200&height=600&quality=60&format=avif&fit=contain"


def test_empty_identifiers_yield_empty_string():
    assert resolve_asset_url(None, base_url=CMS) == ""
    assert resolve_asset_url("", {"width": 10}, base_url=CMS) == ""
    assert resolve_asset_url({"id": None}, base_url=CMS) == ""


def test_file_objects_are_unwrapped():
    assert resolve_asset_url({"id": "f-1", "type": "image/jpeg"}, base_url=CMS) == f"{CMS}/assets/f-1"


def test_resolution_is_idempotent():
    once = resolve_asset_url("abc123", AssetTransform(width=400), base_url=CMS)
    twice = resolve_asset_url(once, AssetTransform(width=1600, quality=10), base_url=CMS)
    assert twice == once


def test_responsive_image_set_keeps_sizes():
    entries = responsive_image_set("abc123", [{"width": 400}, AssetTransform(width=800, height=450)], base_url=CMS)
    assert entries[0] == {
        "width": 400,
        "url": f"{CMS}/assets/abc123?width=400&quality=80&format=webp&fit=cover",
    }
    assert entries[1]["height"] == 450
    assert entries[1]["url"].startswith(f"{CMS}/assets/abc123?width=800&height=450")


def test_build_srcset():
    srcset = build_srcset("abc123", [400, 800], base_url=CMS)
    assert srcset == (
        f"{CMS}/assets/abc123?width=400&quality=80&format=webp&fit=cover 400w, "
        f"{CMS}/assets/abc123?width=800&quality=80&format=webp&fit=cover 800w"
    )
    assert build_srcset("/images/local.jpg", [400], base_url=CMS) == "/images/local.jpg"
    assert build_srcset(None, [400], base_url=CMS) == ""
