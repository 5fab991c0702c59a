"""Destination collection reads, including hotel enrichment for detail pages."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Union

from hotel_content.items.models import CollectionResult
from hotel_content.query.builder import FilterSpec
from hotel_content.services.credentials import Credential
from hotel_content.services.transport import CmsTransport

from .base import CollectionFetcher, CollectionSpec
from .hotels import HotelFetcher

logger = logging.getLogger(__name__)

DESTINATIONS = CollectionSpec(
    name="destinations",
    fields="*,main_image.*,translations.*",
    detail_fields="*,main_image.*,gallery.image.*,translations.*,highlights.image.*,activities.image.*",
    image_fields=("main_image",),
    detail_image_fields=("main_image", "gallery", "highlights.image", "activities.image"),
    default_sort="-date_created",
    default_limit=100,
    freshness_seconds=600,
)


class DestinationFetcher(CollectionFetcher):
    spec = DESTINATIONS

    def __init__(
        self,
        transport: CmsTransport,
        *,
        asset_base_url: str,
        hotels: Optional[HotelFetcher] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(transport, asset_base_url=asset_base_url, **kwargs)
        self.hotels = hotels or HotelFetcher(
            transport,
            asset_base_url=asset_base_url,
            retries=self.retries,
            retry_base_delay=self.retry_base_delay,
        )

    async def list_destinations(
        self,
        locale: str,
        credential: Credential,
        *,
        featured: Optional[bool] = None,
        popular: Optional[bool] = None,
        region: Optional[str] = None,
        filter: Optional[FilterSpec] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Union[str, Sequence[str], None] = None,
        fallback_locale: Optional[str] = None,
    ) -> CollectionResult:
        spec: Dict[str, Any] = {}
        if featured is not None:
            spec["is_featured"] = {"_eq": featured}
        if popular is not None:
            spec["is_popular"] = {"_eq": popular}
        if region:
            spec["region"] = {"_eq": region}
        if filter:
            spec.update(filter)
        return await self.fetch_many(
            locale,
            credential,
            filter=spec,
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
        hotels = await self.hotels.list_hotels(
            locale,
            credential,
            destination_id=item["id"],
            fallback_locale=fallback_locale,
        )
        if not hotels.ok:
            logger.warning("Hotels for destination %s unavailable; continuing without them", item["id"])
        return {**item, "hotels": list(hotels.data)}
