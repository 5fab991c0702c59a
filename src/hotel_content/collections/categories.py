"""Category collection reads."""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

from hotel_content.items.models import CollectionResult
from hotel_content.query.builder import FilterSpec
from hotel_content.services.credentials import Credential

from .base import CollectionFetcher, CollectionSpec

CATEGORIES = CollectionSpec(
    name="categories",
    fields="*,image.*,translations.*",
    image_fields=("image",),
    published_only=False,
    default_sort="sort",
    freshness_seconds=1800,
)

# Categories typed "both" apply to hotels and destinations alike.
SHARED_CATEGORY_TYPE = "both"


class CategoryFetcher(CollectionFetcher):
    spec = CATEGORIES

    async def list_categories(
        self,
        locale: str,
        credential: Credential,
        *,
        type: Optional[str] = None,
        featured: Optional[bool] = None,
        filter: Optional[FilterSpec] = None,
        sort: Union[str, Sequence[str], None] = None,
        fallback_locale: Optional[str] = None,
    ) -> CollectionResult:
        spec: Dict[str, Any] = {}
        if type:
            types = [type] if type == SHARED_CATEGORY_TYPE else [type, SHARED_CATEGORY_TYPE]
            spec["type"] = {"_in": types}
        if featured is not None:
            spec["featured"] = {"_eq": featured}
        if filter:
            spec.update(filter)
        return await self.fetch_many(
            locale,
            credential,
            filter=spec,
            sort=sort,
            fallback_locale=fallback_locale,
        )
