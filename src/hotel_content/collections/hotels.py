"""Hotel collection reads, including room enrichment for detail pages."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Union

from hotel_content.items.models import CollectionResult
from hotel_content.query.builder import FilterSpec
from hotel_content.services.credentials import Credential
from hotel_content.services.transport import CmsTransport

from .base import CollectionFetcher, CollectionSpec
from .rooms import RoomFetcher

logger = logging.getLogger(__name__)

HOTELS = CollectionSpec(
    name="hotels",
    fields="*,main_image.*,translations.*,destination.*,destination.translations.*",
    detail_fields="*,main_image.*,gallery.image.*,translations.*,destination.*,destination.translations.*",
    image_fields=("main_image",),
    detail_image_fields=("main_image", "gallery"),
    default_sort="-date_created",
    default_limit=100,
    freshness_seconds=300,
)


def hotel_filter(
    *,
    featured: Optional[bool] = None,
    destination_id: Union[str, int, None] = None,
    destination_slug: Optional[str] = None,
    category: Optional[str] = None,
    extra: Optional[FilterSpec] = None,
) -> Dict[str, Any]:
    """Translate hotel listing options into a filter spec."""
    spec: Dict[str, Any] = {}
    if featured is not None:
        spec["is_featured"] = {"_eq": featured}
    if destination_id is not None:
        spec["destination"] = {"_eq": destination_id}
    elif destination_slug:
        spec["destination"] = {"slug": {"_eq": destination_slug}}
    if category:
        spec["categories"] = {"_contains": category}
    if extra:
        spec.update(extra)
    return spec


class HotelFetcher(CollectionFetcher):
    spec = HOTELS

    def __init__(
        self,
        transport: CmsTransport,
        *,
        asset_base_url: str,
        rooms: Optional[RoomFetcher] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(transport, asset_base_url=asset_base_url, **kwargs)
        self.rooms = rooms or RoomFetcher(
            transport,
            asset_base_url=asset_base_url,
            retries=self.retries,
            retry_base_delay=self.retry_base_delay,
        )

    async def list_hotels(
        self,
        locale: str,
        credential: Credential,
        *,
        featured: Optional[bool] = None,
        destination_id: Union[str, int, None] = None,
        destination_slug: Optional[str] = None,
        category: Optional[str] = None,
        filter: Optional[FilterSpec] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Union[str, Sequence[str], None] = None,
        fallback_locale: Optional[str] = None,
    ) -> CollectionResult:
        return await self.fetch_many(
            locale,
            credential,
            filter=hotel_filter(
                featured=featured,
                destination_id=destination_id,
                destination_slug=destination_slug,
                category=category,
                extra=filter,
            ),
            limit=limit,
            offset=offset,
            sort=sort,
            fallback_locale=fallback_locale,
        )

    async def enrich(
        self,
        item: Dict[str, Any],
        locale: str,
        credential: Credential,
        *,
        fallback_locale: Optional[str] = None,
    ) -> Dict[str, Any]:
        rooms = await self.rooms.for_hotel(item["id"], locale, credential, fallback_locale=fallback_locale)
        if not rooms.ok:
            logger.warning("Rooms for hotel %s unavailable; continuing without them", item["id"])
        return {**item, "rooms": list(rooms.data)}
