"""Wires every collection fetcher to one transport and configuration."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Dict, Mapping, Optional

import httpx

from hotel_content.config.settings import Settings
from hotel_content.services.transport import CmsTransport

from .categories import CategoryFetcher
from .destinations import DestinationFetcher
from .hotels import HotelFetcher
from .pages import NavigationFetcher, PageFetcher
from .rooms import RoomFetcher
from .translations import TranslationFetcher


@dataclass
class ContentFetchers:
    transport: CmsTransport
    hotels: HotelFetcher
    rooms: RoomFetcher
    destinations: DestinationFetcher
    categories: CategoryFetcher
    pages: PageFetcher
    navigation: NavigationFetcher
    translations: TranslationFetcher

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "ContentFetchers":
        transport = CmsTransport.from_settings(settings, client=client)
        rooms = RoomFetcher.from_settings(transport, settings)
        hotels = HotelFetcher.from_settings(transport, settings, rooms=rooms)
        return cls(
            transport=transport,
            hotels=hotels,
            rooms=rooms,
            destinations=DestinationFetcher.from_settings(transport, settings, hotels=hotels),
            categories=CategoryFetcher.from_settings(transport, settings),
            pages=PageFetcher.from_settings(transport, settings),
            navigation=NavigationFetcher.from_settings(transport, settings),
            translations=TranslationFetcher.from_settings(transport, settings),
        )

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "ContentFetchers":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


async def fetch_all(requests: Mapping[str, Awaitable[Any]]) -> Dict[str, Any]:
    """Await independent fetches concurrently and key the results by name."""
    names = list(requests)
    results = await asyncio.gather(*(requests[name] for name in names))
    return dict(zip(names, results))
