"""Pure functional transformations for domain entities."""

from .core import (
    SEARCHABLE_ATTRIBUTES,
    Transform,
    create_pipeline,
    filter_by_predicate,
    filter_by_text,
    matches_text,
    sort_by_attribute,
)

__all__ = [
    "SEARCHABLE_ATTRIBUTES",
    "Transform",
    "create_pipeline",
    "filter_by_predicate",
    "filter_by_text",
    "matches_text",
    "sort_by_attribute",
]
