"""UI string translations stored as key/value rows in the CMS."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping

from hotel_content.services.credentials import Credential
from hotel_content.services.transport import ContentError

from .base import CollectionFetcher, CollectionSpec

logger = logging.getLogger(__name__)

TRANSLATIONS = CollectionSpec(
    name="translations",
    fields="key,value",
    translated_relations=(),
    published_only=False,
    default_limit=-1,
    freshness_seconds=86400,
    meta=None,
)


def rows_to_strings(rows: Any) -> Dict[str, str]:
    strings: Dict[str, str] = {}
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        return strings
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        key = row.get("key")
        if not key:
            continue
        value = row.get("value")
        strings[str(key)] = "" if value is None else str(value)
    return strings


class TranslationFetcher(CollectionFetcher):
    spec = TRANSLATIONS

    async def strings(self, language: str, credential: Credential) -> Dict[str, str]:
        """Return ``{key: text}`` for ``language``; an empty dict when the CMS is unreachable."""
        endpoint = self.spec.endpoint
        options = self.build_options(language, filter={"language": {"_eq": language}})
        try:
            payload = await self._request(endpoint, options, credential)
        except ContentError as exc:
            logger.error("Failed to read %s (locale %s): %s", endpoint, language, exc)
            return {}
        return rows_to_strings(payload.get("data") or [])
