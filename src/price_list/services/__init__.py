"""Service layer entry points."""

from .export import EXPORT_FIELDS, ExportFile, build_export, flatten_items, items_to_csv, items_to_json
from .paging import PAGE_SIZE, ExposureHub, IncrementalRenderer, RenderPass, VisibilityNotifier
from .sorting import SIMILARITY_MAX_ITEMS, SortOption, similarity_allowed, sort_items, sort_options
from .view_state import ViewStateController

__all__ = [
    "EXPORT_FIELDS",
    "ExportFile",
    "ExposureHub",
    "IncrementalRenderer",
    "PAGE_SIZE",
    "RenderPass",
    "SIMILARITY_MAX_ITEMS",
    "SortOption",
    "ViewStateController",
    "VisibilityNotifier",
    "build_export",
    "flatten_items",
    "items_to_csv",
    "items_to_json",
    "similarity_allowed",
    "sort_items",
    "sort_options",
]
