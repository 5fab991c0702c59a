"""CMS query-string construction."""

from .builder import (
    DeepFilterSpec,
    FilterSpec,
    QueryOptions,
    build_params,
    build_query,
    merge_filters,
)

__all__ = [
    "DeepFilterSpec",
    "FilterSpec",
    "QueryOptions",
    "build_params",
    "build_query",
    "merge_filters",
]
