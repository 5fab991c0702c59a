"""Serialise structured query intent into the CMS query-string grammar."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote

FilterSpec = Mapping[str, Any]
DeepFilterSpec = Mapping[str, FilterSpec]
FieldSelection = Union[str, Sequence[str]]

DEFAULT_OPERATOR = "_eq"

_KEY_SAFE = "[]_.-"
_VALUE_SAFE = ",*._-"


@dataclass(frozen=True)
class QueryOptions:
    """Structured query intent for one collection read."""

    filter: FilterSpec = field(default_factory=dict)
    fields: Optional[FieldSelection] = None
    deep: DeepFilterSpec = field(default_factory=dict)
    limit: Optional[int] = None
    offset: Optional[int] = None
    sort: Optional[FieldSelection] = None
    meta: Optional[FieldSelection] = None


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_format_value(item) for item in value)
    return str(value)


def _join(selection: FieldSelection) -> str:
    if isinstance(selection, str):
        return selection
    return ",".join(str(item) for item in selection)


def _filter_pairs(prefix: str, spec: FilterSpec) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for name, value in spec.items():
        key = f"{prefix}[{name}]"
        if not isinstance(value, Mapping):
            pairs.append((f"{key}[{DEFAULT_OPERATOR}]", _format_value(value)))
            continue
        for operator, operand in value.items():
            if isinstance(operand, Mapping):
                # Relation filter, e.g. {"destination": {"slug": {"_eq": ...}}}.
                pairs.extend(_filter_pairs(key, {operator: operand}))
            else:
                pairs.append((f"{key}[{operator}]", _format_value(operand)))
    return pairs


def build_params(options: Optional[QueryOptions] = None, **overrides: Any) -> List[Tuple[str, str]]:
    """Return the ordered ``(key, value)`` pairs for ``options``.

    Parameters are emitted as filter, fields, deep, limit, offset, sort, meta; within
    each group the caller's mapping order is preserved so identical intent always
    produces an identical query string.
    """
    if options is None:
        options = QueryOptions(**overrides)
    elif overrides:
        raise TypeError("Pass either a QueryOptions instance or keyword options, not both")

    params: List[Tuple[str, str]] = []
    if options.filter:
        params.extend(_filter_pairs("filter", options.filter))
    if options.fields:
        params.append(("fields", _join(options.fields)))
    if options.deep:
        for relation, spec in options.deep.items():
            if isinstance(spec, Mapping):
                params.extend(_filter_pairs(f"deep[{relation}]", spec))
    if options.limit is not None:
        params.append(("limit", str(options.limit)))
    if options.offset is not None:
        params.append(("offset", str(options.offset)))
    if options.sort:
        params.append(("sort", _join(options.sort)))
    if options.meta:
        params.append(("meta", _join(options.meta)))
    return params


def build_query(options: Optional[QueryOptions] = None, **overrides: Any) -> str:
    """Serialise ``options`` into a URL query string (without the leading ``?``)."""
    return "&".join(
        f"{quote(key, safe=_KEY_SAFE)}={quote(value, safe=_VALUE_SAFE)}"
        for key, value in build_params(options, **overrides)
    )


def merge_filters(base: Optional[FilterSpec], override: Optional[FilterSpec]) -> Dict[str, Any]:
    """Combine a fetcher's base filter with a caller filter; caller keys win."""
    merged: Dict[str, Any] = dict(base or {})
    if override:
        merged.update(override)
    return merged
