"""
Rendered flow views.

A FlowView is the rendering collaborator's handle on one rendered copy of the
document content. The pagination engine only ever measures block geometry
and sets corrective top margins through this interface; it never sees what a
block contains.

StaticFlow is an in-memory FlowView over fixed block geometry, modelling a
single flowed column: a top margin on one block moves that block and every
block after it down by the same amount.
"""

from typing import Dict, Iterable, List, Protocol

from galley.contexts.layout.geometry import BlockGeometry


class FlowView(Protocol):
    """One rendered copy of the flowed content."""

    def clear_margins(self) -> None:
        """Remove every corrective margin applied to this copy."""
        ...

    def set_margin(self, ordinal: int, margin: float) -> None:
        """Set the corrective top margin on the block at ordinal."""
        ...

    def measure(self) -> List[BlockGeometry]:
        """Current geometry of every block, relative to the container top, in document order."""
        ...

    def content_height(self) -> float:
        """Current total height of the flowed content."""
        ...


class StaticFlow:
    """
    FlowView over fixed natural geometry.

    Args:
        blocks: Block geometry with no corrective margins applied
        content_height: Natural total content height (defaults to the lowest block bottom)
    """

    def __init__(self, blocks: Iterable[BlockGeometry], content_height: float = None):
        self._blocks = sorted(blocks, key=lambda block: block.ordinal)
        if content_height is None:
            content_height = max((block.bottom for block in self._blocks), default=0.0)
        self._content_height = content_height
        self._margins: Dict[int, float] = {}

    @property
    def margins(self) -> Dict[int, float]:
        """Copy of the corrective margins currently applied, by ordinal."""
        return dict(self._margins)

    def clear_margins(self) -> None:
        self._margins.clear()

    def set_margin(self, ordinal: int, margin: float) -> None:
        if margin:
            self._margins[ordinal] = margin
        else:
            self._margins.pop(ordinal, None)

    def measure(self) -> List[BlockGeometry]:
        measured = []
        shift = 0.0
        for block in self._blocks:
            shift += self._margins.get(block.ordinal, 0.0)
            measured.append(
                BlockGeometry(
                    ordinal=block.ordinal,
                    top=block.top + shift,
                    bottom=block.bottom + shift,
                    atomic=block.atomic,
                )
            )
        return measured

    def content_height(self) -> float:
        return self._content_height + sum(self._margins.values())
