"""
Geometry types for pagination.

All lengths are CSS pixels. Vertical positions are measured from the top of
the flowed content container, so a block at top=1043 on an A4 page starts
exactly at the top of the second page.
"""

import math
from dataclasses import dataclass
from typing import List

from galley.utils.config import get_config


@dataclass
class BlockGeometry:
    """
    Measured position of one rendered block.

    Attributes:
        ordinal: Position of the block in document order within its rendered copy
        top: Distance from container top to the block's top edge
        bottom: Distance from container top to the block's bottom edge
        atomic: True if the block must not be split across a page boundary
    """

    ordinal: int
    top: float
    bottom: float
    atomic: bool = True

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def start_page(self, capacity: float) -> int:
        """Index of the page the block's top edge falls on."""
        return math.floor(self.top / capacity)

    def end_page(self, capacity: float) -> int:
        """Index of the page the block's last pixel row falls on."""
        return math.floor(max(0.0, self.bottom - 1) / capacity)

    def straddles(self, capacity: float) -> bool:
        return self.start_page(capacity) != self.end_page(capacity)


@dataclass(frozen=True)
class Page:
    """
    One fixed-capacity viewport over the flowed content.

    Pages do not own content; every page renders the same flow shifted up by
    its offset and clipped to its height.
    """

    index: int
    height: float

    @property
    def offset(self) -> float:
        return -self.index * self.height


def pages_for(page_count: int, capacity: float) -> List[Page]:
    """Page windows for a given page count."""
    return [Page(index=i, height=capacity) for i in range(page_count)]


def page_count_for(content_height: float, capacity: float) -> int:
    """
    Number of pages needed to show content_height (never fewer than one).

    Examples:
        >>> page_count_for(2200, 1043)
        3
        >>> page_count_for(0, 1043)
        1
    """
    return max(1, math.ceil(content_height / capacity))


@dataclass(frozen=True)
class PageGeometry:
    """
    Printable page size and padding.

    Attributes:
        name: Preset name ("a4", "letter")
        width: Page width
        height: Page height
        padding_x: Left/right padding
        padding_y: Top/bottom padding
        gap: Vertical gap between pages in the on-screen stack
    """

    name: str
    width: float
    height: float
    padding_x: float
    padding_y: float
    gap: float

    @property
    def content_height(self) -> float:
        """Usable vertical space per page (the page capacity)."""
        return self.height - 2 * self.padding_y

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.padding_x


def get_page_geometry(name: str = None) -> PageGeometry:
    """
    Look up a page size preset from configuration.

    Args:
        name: Preset name (defaults to layout.default_page_size)

    Raises:
        ValueError: If the preset is not configured
    """
    config = get_config()
    name = (name or config["layout"]["default_page_size"]).lower()
    presets = config["page_sizes"]
    if name not in presets:
        raise ValueError(f"Page size '{name}' not found. Available page sizes: {list(presets)}")
    return PageGeometry(name=name, **presets[name])


# A4 at 96 dpi: 1123 - 2 * 40 = 1043
CONTENT_HEIGHT = get_page_geometry("a4").content_height
