"""Room collection reads."""
from __future__ import annotations

from typing import Optional, Union

from hotel_content.items.models import CollectionResult
from hotel_content.services.credentials import Credential

from .base import CollectionFetcher, CollectionSpec

ROOMS = CollectionSpec(
    name="rooms",
    fields="*,main_image.*,gallery.image.*,translations.*",
    image_fields=("main_image", "gallery"),
    default_sort="sort",
    freshness_seconds=300,
)


class RoomFetcher(CollectionFetcher):
    spec = ROOMS

    async def for_hotel(
        self,
        hotel_id: Union[str, int],
        locale: str,
        credential: Credential,
        *,
        fallback_locale: Optional[str] = None,
    ) -> CollectionResult:
        return await self.fetch_many(
            locale,
            credential,
            filter={"hotel": {"_eq": hotel_id}},
            fallback_locale=fallback_locale,
        )
