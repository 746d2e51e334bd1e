"""
Layout Context

Responsibilities:
- Measures rendered blocks against fixed-capacity pages
- Pushes atomic blocks that straddle a page boundary onto the next page
- Keeps every rendered page copy in sync with the same corrections
- Derives the page count from the corrected content height

Owns: Corrective margins, page count, page size presets
Never: Reads document content (only block geometry)
"""

from galley.contexts.layout.flow import FlowView, StaticFlow
from galley.contexts.layout.geometry import (
    CONTENT_HEIGHT,
    BlockGeometry,
    Page,
    PageGeometry,
    get_page_geometry,
    page_count_for,
)
from galley.contexts.layout.pagination import LayoutResult, PaginationEngine, paginate

__all__ = [
    "CONTENT_HEIGHT",
    "BlockGeometry",
    "Page",
    "PageGeometry",
    "get_page_geometry",
    "page_count_for",
    "FlowView",
    "StaticFlow",
    "LayoutResult",
    "PaginationEngine",
    "paginate",
]
