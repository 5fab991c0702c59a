"""Normalised content items and fetch result models."""

from .models import CollectionResult, FetchDiagnostic, ResultMeta
from .normalizer import normalize_item, normalize_items, resolve_images

__all__ = [
    "CollectionResult",
    "FetchDiagnostic",
    "ResultMeta",
    "normalize_item",
    "normalize_items",
    "resolve_images",
]
