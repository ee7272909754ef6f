"""Kernel specification catalog."""

from kernel_selector.catalog.registry import (
    CATALOG_PATH,
    SpecRegistry,
    build_menu_entries,
    compare_display_names,
    parse_catalog,
)

__all__ = [
    "CATALOG_PATH",
    "SpecRegistry",
    "build_menu_entries",
    "compare_display_names",
    "parse_catalog",
]
