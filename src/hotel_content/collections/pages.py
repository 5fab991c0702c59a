"""Editorial pages and the site navigation derived from them."""
from __future__ import annotations

import logging
from typing import Optional

from hotel_content.items.models import CollectionResult
from hotel_content.services.credentials import Credential

from .base import CollectionFetcher, CollectionSpec

logger = logging.getLogger(__name__)

PAGES = CollectionSpec(
    name="pages",
    fields="*,featured_image.*,translations.*",
    image_fields=("featured_image",),
    default_sort="sort",
    freshness_seconds=3600,
)

NAVIGATION = CollectionSpec(
    name="pages",
    fields="id,title,slug,translations.*",
    published_only=True,
    base_filter={"show_in_navigation": {"_eq": True}},
    default_sort="sort",
    freshness_seconds=3600,
)

NAVIGATION_KEYS: tuple[str, ...] = ("id", "title", "slug")


class PageFetcher(CollectionFetcher):
    spec = PAGES


class NavigationFetcher(CollectionFetcher):
    """Pages flagged for the main menu, reduced to ``{id, title, slug}`` entries.

    An unreachable CMS yields an empty result with a diagnostic; the menu is never
    filled with placeholder pages.
    """

    spec = NAVIGATION

    async def entries(
        self,
        locale: str,
        credential: Credential,
        *,
        fallback_locale: Optional[str] = None,
    ) -> CollectionResult:
        result = await self.fetch_many(locale, credential, fallback_locale=fallback_locale)
        if not result.ok:
            logger.warning("Navigation for %s is empty: %s", locale, result.diagnostic.error)
            return result
        result.data = [{key: page.get(key) for key in NAVIGATION_KEYS} for page in result.data]
        return result
