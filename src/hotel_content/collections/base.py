"""Generic collection fetcher composing query building, transport and normalisation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from hotel_content.config.settings import Settings
from hotel_content.items.models import CollectionResult, FetchDiagnostic, ResultMeta
from hotel_content.items.normalizer import normalize_item, normalize_items
from hotel_content.query.builder import FilterSpec, QueryOptions, build_query, merge_filters
from hotel_content.services.credentials import Credential, resolve_credential
from hotel_content.services.transport import CmsTransport, ContentError, TransportError
from hotel_content.utils.backoff import with_retries

logger = logging.getLogger(__name__)

PUBLISHED_STATUS = "published"
# Directus answers 403 rather than 404 for items the token cannot see.
NOT_FOUND_STATUSES = frozenset({403, 404})


@dataclass(frozen=True)
class CollectionSpec:
    """Declares how one CMS collection is read and normalised."""

    name: str
    fields: str = "*,translations.*"
    detail_fields: Optional[str] = None
    image_fields: Tuple[str, ...] = ()
    detail_image_fields: Optional[Tuple[str, ...]] = None
    translated_relations: Tuple[str, ...] = ("translations",)
    published_only: bool = True
    base_filter: Mapping[str, Any] = field(default_factory=dict)
    default_sort: Optional[str] = None
    default_limit: Optional[int] = None
    freshness_seconds: Optional[int] = None
    meta: Optional[str] = "total_count,filter_count"

    @property
    def endpoint(self) -> str:
        return f"items/{self.name}"

    def item_endpoint(self, item_id: Union[str, int]) -> str:
        return f"{self.endpoint}/{item_id}"

    def filter_for(self, caller_filter: Optional[FilterSpec] = None) -> Dict[str, Any]:
        base: Dict[str, Any] = dict(self.base_filter)
        if self.published_only:
            base = {"status": {"_eq": PUBLISHED_STATUS}, **base}
        return merge_filters(base, caller_filter)

    def deep_for(self, locale: str, fallback_locale: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
        """Limit translated relations to the requested locale, plus the fallback when given."""
        if fallback_locale and fallback_locale != locale:
            condition: Dict[str, Any] = {"_in": [locale, fallback_locale]}
        else:
            condition = {"_eq": locale}
        return {relation: {"languages_code": dict(condition)} for relation in self.translated_relations}

    def fields_for(self, detail: bool) -> str:
        if detail and self.detail_fields:
            return self.detail_fields
        return self.fields

    def images_for(self, detail: bool) -> Tuple[str, ...]:
        if detail and self.detail_image_fields is not None:
            return self.detail_image_fields
        return self.image_fields


class CollectionFetcher:
    """Reads one collection and returns normalised items.

    Transport and parse failures are logged with endpoint and locale and turned
    into ``None`` (single items) or an empty :class:`CollectionResult` carrying a
    diagnostic, so page code never sees CMS exceptions.
    """

    spec: ClassVar[CollectionSpec]

    def __init__(
        self,
        transport: CmsTransport,
        *,
        asset_base_url: str,
        spec: Optional[CollectionSpec] = None,
        retries: int = 0,
        retry_base_delay: float = 0.3,
    ) -> None:
        if spec is not None:
            self.spec = spec
        self.transport = transport
        self.asset_base_url = asset_base_url
        self.retries = retries
        self.retry_base_delay = retry_base_delay

    @classmethod
    def from_settings(cls, transport: CmsTransport, settings: Settings, **kwargs: Any) -> "CollectionFetcher":
        return cls(
            transport,
            asset_base_url=settings.assets_origin,
            retries=settings.max_retries,
            retry_base_delay=settings.retry_base_delay_s,
            **kwargs,
        )

    def build_options(
        self,
        locale: str,
        *,
        filter: Optional[FilterSpec] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Union[str, Sequence[str], None] = None,
        fallback_locale: Optional[str] = None,
        detail: bool = False,
        with_meta: bool = True,
    ) -> QueryOptions:
        return QueryOptions(
            filter=self.spec.filter_for(filter),
            fields=self.spec.fields_for(detail),
            deep=self.spec.deep_for(locale, fallback_locale),
            limit=limit if limit is not None else self.spec.default_limit,
            offset=offset,
            sort=sort if sort is not None else self.spec.default_sort,
            meta=self.spec.meta if with_meta else None,
        )

    async def _request(self, endpoint: str, options: QueryOptions, credential: Credential) -> Dict[str, Any]:
        token = resolve_credential(credential)
        query_string = build_query(options)
        return await with_retries(
            lambda: self.transport.execute(endpoint, query_string, token),
            retries=self.retries,
            base_delay=self.retry_base_delay,
            label=f"GET {endpoint}",
        )

    def _normalize(
        self,
        items: Any,
        locale: str,
        fallback_locale: Optional[str],
        detail: bool,
    ) -> List[Dict[str, Any]]:
        if isinstance(items, Mapping):
            items = [items]
        return normalize_items(
            items,
            locale,
            self.spec.images_for(detail),
            base_url=self.asset_base_url,
            fallback_locale=fallback_locale,
            collection=self.spec.name,
        )

    def _diagnostic(self, endpoint: str, locale: str, exc: ContentError) -> FetchDiagnostic:
        status = exc.status_code if isinstance(exc, TransportError) else None
        return FetchDiagnostic(endpoint=endpoint, locale=locale, error=str(exc), status_code=status)

    async def fetch_many(
        self,
        locale: str,
        credential: Credential,
        *,
        filter: Optional[FilterSpec] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Union[str, Sequence[str], None] = None,
        fallback_locale: Optional[str] = None,
        detail: bool = False,
    ) -> CollectionResult:
        endpoint = self.spec.endpoint
        options = self.build_options(
            locale,
            filter=filter,
            limit=limit,
            offset=offset,
            sort=sort,
            fallback_locale=fallback_locale,
            detail=detail,
        )
        try:
            payload = await self._request(endpoint, options, credential)
        except ContentError as exc:
            logger.error("Failed to read %s (locale %s): %s", endpoint, locale, exc)
            return CollectionResult.failed(
                self._diagnostic(endpoint, locale, exc),
                max_age_seconds=self.spec.freshness_seconds,
            )

        items = self._normalize(payload.get("data"), locale, fallback_locale, detail)
        meta = ResultMeta.from_response(
            payload.get("meta"),
            count=len(items),
            max_age_seconds=self.spec.freshness_seconds,
        )
        logger.debug("Read %s %s item(s) for locale %s", len(items), self.spec.name, locale)
        return CollectionResult(data=items, meta=meta)

    async def fetch_one(
        self,
        locale: str,
        credential: Credential,
        *,
        filter: FilterSpec,
        fallback_locale: Optional[str] = None,
        enrich: bool = True,
    ) -> Optional[Dict[str, Any]]:
        endpoint = self.spec.endpoint
        options = self.build_options(
            locale,
            filter=filter,
            limit=1,
            fallback_locale=fallback_locale,
            detail=True,
            with_meta=False,
        )
        try:
            payload = await self._request(endpoint, options, credential)
        except ContentError as exc:
            logger.error("Failed to read %s %s (locale %s): %s", self.spec.name, dict(filter), locale, exc)
            return None

        items = self._normalize(payload.get("data"), locale, fallback_locale, True)
        if not items:
            logger.info("No %s found matching %s", self.spec.name, dict(filter))
            return None
        item = items[0]
        if enrich:
            item = await self.enrich(item, locale, credential, fallback_locale=fallback_locale)
        return item

    async def fetch_by_slug(
        self,
        slug: str,
        locale: str,
        credential: Credential,
        *,
        fallback_locale: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.fetch_one(
            locale,
            credential,
            filter={"slug": {"_eq": slug}},
            fallback_locale=fallback_locale,
        )

    async def fetch_by_id(
        self,
        item_id: Union[str, int],
        locale: str,
        credential: Credential,
        *,
        fallback_locale: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        endpoint = self.spec.item_endpoint(item_id)
        options = QueryOptions(fields=self.spec.fields_for(True), deep=self.spec.deep_for(locale, fallback_locale))
        try:
            payload = await self._request(endpoint, options, credential)
        except TransportError as exc:
            if exc.status_code in NOT_FOUND_STATUSES:
                logger.info("No %s found with id %s", self.spec.name, item_id)
            else:
                logger.error("Failed to read %s (locale %s): %s", endpoint, locale, exc)
            return None
        except ContentError as exc:
            logger.error("Failed to read %s (locale %s): %s", endpoint, locale, exc)
            return None

        data = payload.get("data")
        if not isinstance(data, Mapping):
            logger.info("No %s found with id %s", self.spec.name, item_id)
            return None
        status = data.get("status")
        if self.spec.published_only and status is not None and str(status).lower() != PUBLISHED_STATUS:
            logger.info("Skipping unpublished %s %s", self.spec.name, item_id)
            return None
        item = normalize_item(
            data,
            locale,
            self.spec.images_for(True),
            base_url=self.asset_base_url,
            fallback_locale=fallback_locale,
            collection=self.spec.name,
        )
        if item is None:
            return None
        return await self.enrich(item, locale, credential, fallback_locale=fallback_locale)

    async def enrich(
        self,
        item: Dict[str, Any],
        locale: str,
        credential: Credential,
        *,
        fallback_locale: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Hook for attaching related collections to a detail item."""
        return item
