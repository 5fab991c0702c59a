"""Dataclasses describing fetch results handed to page code."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(slots=True, frozen=True)
class ResultMeta:
    """Counts reported by the CMS plus the freshness window for the payload."""

    count: int
    total_count: Optional[int] = None
    filter_count: Optional[int] = None
    max_age_seconds: Optional[int] = None

    @classmethod
    def from_response(
        cls,
        meta: Optional[Mapping[str, Any]],
        *,
        count: int,
        max_age_seconds: Optional[int] = None,
    ) -> "ResultMeta":
        if not isinstance(meta, Mapping):
            meta = {}
        return cls(
            count=count,
            total_count=_as_int(meta.get("total_count")),
            filter_count=_as_int(meta.get("filter_count")),
            max_age_seconds=max_age_seconds,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "count": self.count,
            "total_count": self.total_count,
            "filter_count": self.filter_count,
            "max_age_seconds": self.max_age_seconds,
        }


@dataclass(slots=True, frozen=True)
class FetchDiagnostic:
    """Why a collection came back empty when the CMS could not be read."""

    endpoint: str
    locale: str
    error: str
    status_code: Optional[int] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "endpoint": self.endpoint,
            "locale": self.locale,
            "error": self.error,
            "status_code": self.status_code,
        }


@dataclass(slots=True)
class CollectionResult:
    """Normalised items from one collection read."""

    data: List[Dict[str, Any]] = field(default_factory=list)
    meta: ResultMeta = field(default_factory=lambda: ResultMeta(count=0))
    diagnostic: Optional[FetchDiagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    @classmethod
    def failed(cls, diagnostic: FetchDiagnostic, *, max_age_seconds: Optional[int] = None) -> "CollectionResult":
        return cls(data=[], meta=ResultMeta(count=0, max_age_seconds=max_age_seconds), diagnostic=diagnostic)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def to_dict(self) -> dict[str, object]:
        return {
            "data": list(self.data),
            "meta": self.meta.to_dict(),
            "diagnostic": self.diagnostic.to_dict() if self.diagnostic else None,
        }


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
