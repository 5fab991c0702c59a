"""Domain fetchers for the CMS collections."""

from .base import PUBLISHED_STATUS, CollectionFetcher, CollectionSpec
from .categories import CATEGORIES, CategoryFetcher
from .destinations import DESTINATIONS, DestinationFetcher
from .hotels import HOTELS, HotelFetcher, hotel_filter
from .pages import NAVIGATION, PAGES, NavigationFetcher, PageFetcher
from .registry import ContentFetchers, fetch_all
from .rooms import ROOMS, RoomFetcher
from .translations import TRANSLATIONS, TranslationFetcher

__all__ = [
    "CATEGORIES",
    "DESTINATIONS",
    "HOTELS",
    "NAVIGATION",
    "PAGES",
    "PUBLISHED_STATUS",
    "ROOMS",
    "TRANSLATIONS",
    "CategoryFetcher",
    "CollectionFetcher",
    "CollectionSpec",
    "ContentFetchers",
    "DestinationFetcher",
    "HotelFetcher",
    "NavigationFetcher",
    "PageFetcher",
    "RoomFetcher",
    "TranslationFetcher",
    "fetch_all",
    "hotel_filter",
]
