"""
Pagination by bounded iterative relaxation.

Turns one continuously flowed rendering into fixed-capacity pages without
splitting atomic blocks across a page boundary. Each pass:

1. Clears every corrective margin on the canonical copy.
2. Repeats up to max_iterations times:
   a. Re-measures all atomic blocks.
   b. Skips blocks taller than a page (they cannot fit anywhere) and blocks
      of zero height (not rendered yet).
   c. Finds the first block whose first and last pixel rows fall on
      different pages, ignoring a block that starts at the very top.
   d. Pushes that block down to start flush at the next page boundary, then
      measures again, since every block below it has moved.
   e. Stops when no block straddles a boundary.
3. Copies the correction table to every replica copy by ordinal.
4. Derives the page count from the corrected content height.

Only one block is fixed per iteration: a push invalidates the measurements of
everything below it. The iteration cap bounds the cost of a pass; a pass that
hits the cap with a block still straddling is reported as not converged.

Known limitation - oversized blocks:
    A block taller than one page is left where it is and overflows across the
    boundary. This is reported as an issue on the result, never raised.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from galley.contexts.layout.flow import FlowView, StaticFlow
from galley.contexts.layout.geometry import (
    CONTENT_HEIGHT,
    BlockGeometry,
    Page,
    page_count_for,
    pages_for,
)
from galley.contexts.layout.logger import _log_debug, log_layout_result
from galley.utils.config import get_config

MAX_RELAXATION_ITERATIONS = get_config()["layout"]["max_iterations"]


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    OVERSIZED_BLOCK = (
        "Block {ordinal} is taller than one page ({height:g}px > {capacity:g}px) "
        "and will straddle a page boundary"
    )
    NOT_CONVERGED = (
        "Layout did not converge within {iterations} iterations; "
        "a block may still straddle a page boundary"
    )


@dataclass
class LayoutResult:
    """
    Outcome of one pagination pass.

    Attributes:
        corrections: Corrective top margin by block ordinal (only non-zero entries)
        page_count: Number of pages needed for the corrected content
        content_height: Total corrected content height
        capacity: Page capacity used
        iterations: Measurement passes performed
        converged: False if the iteration cap was reached with a block still straddling
        oversized: Heights of blocks taller than one page, by ordinal
    """

    corrections: Dict[int, float] = field(default_factory=dict)
    page_count: int = 1
    content_height: float = 0.0
    capacity: float = CONTENT_HEIGHT
    iterations: int = 0
    converged: bool = True
    oversized: Dict[int, float] = field(default_factory=dict)

    def pages(self) -> List[Page]:
        return pages_for(self.page_count, self.capacity)

    def get_issues(self) -> List[str]:
        issues = [
            IssueTemplates.OVERSIZED_BLOCK.format(ordinal=ordinal, height=height, capacity=self.capacity)
            for ordinal, height in sorted(self.oversized.items())
        ]
        if not self.converged:
            issues.append(IssueTemplates.NOT_CONVERGED.format(iterations=self.iterations))
        return issues

    @property
    def is_valid(self) -> bool:
        """True if every atomic block sits within a single page."""
        return len(self.get_issues()) == 0


class PaginationEngine:
    """
    Keeps corrective margins and page count in sync with the rendered flow.

    The rendering collaborator calls recompute() whenever block geometry may
    have changed: after content mutations and once per rendered frame.
    Repeated calls are harmless; a call made while a pass is already running
    returns the previous result.

    Args:
        canonical: The copy that is measured and corrected
        capacity: Page capacity (usable content height per page)
        max_iterations: Cap on measurement passes per recompute()

    Example:
        engine = PaginationEngine(first_page_view)
        engine.attach(second_page_view)
        result = engine.recompute()
        result.page_count, result.corrections
    """

    def __init__(
        self,
        canonical: FlowView,
        capacity: float = CONTENT_HEIGHT,
        max_iterations: int = MAX_RELAXATION_ITERATIONS,
    ):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self.canonical = canonical
        self.capacity = capacity
        self.max_iterations = max_iterations
        self._replicas: List[FlowView] = []
        self._listeners: List[Callable[[LayoutResult], None]] = []
        self._result = LayoutResult(capacity=capacity)
        self._running = False

    @property
    def result(self) -> LayoutResult:
        """Result of the last completed pass."""
        return self._result

    @property
    def page_count(self) -> int:
        return self._result.page_count

    def pages(self) -> List[Page]:
        return self._result.pages()

    # ------------------------------------------------------------------
    # Replicas and listeners
    # ------------------------------------------------------------------

    def attach(self, view: FlowView) -> None:
        """Register another rendered copy; it receives the current corrections at once."""
        self._replicas.append(view)
        self._apply_corrections(view, self._result.corrections)

    def detach(self, view: FlowView) -> None:
        if view in self._replicas:
            self._replicas.remove(view)

    def on_layout(self, callback: Callable[[LayoutResult], None]) -> Callable[[], None]:
        """
        Register a callback invoked with every new LayoutResult.

        Returns:
            Function that removes the callback
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Relaxation
    # ------------------------------------------------------------------

    def _find_straddler(
        self, blocks: Iterable[BlockGeometry], oversized: Dict[int, float]
    ) -> Optional[BlockGeometry]:
        """First atomic block crossing a page boundary, recording oversized blocks on the way."""
        for block in blocks:
            if not block.atomic:
                continue
            if block.height > self.capacity:
                oversized[block.ordinal] = block.height
                continue
            if block.height == 0:
                continue
            if block.top > 0 and block.straddles(self.capacity):
                return block
        return None

    def _relax(self) -> LayoutResult:
        self.canonical.clear_margins()
        corrections: Dict[int, float] = {}
        oversized: Dict[int, float] = {}
        iterations = 0
        converged = False

        while iterations < self.max_iterations:
            iterations += 1
            straddler = self._find_straddler(self.canonical.measure(), oversized)
            if straddler is None:
                converged = True
                break

            push = (straddler.start_page(self.capacity) + 1) * self.capacity - straddler.top
            corrections[straddler.ordinal] = corrections.get(straddler.ordinal, 0.0) + push
            self.canonical.set_margin(straddler.ordinal, corrections[straddler.ordinal])
            _log_debug(
                f"Pushed block {straddler.ordinal} down {push:g}px "
                f"to page {straddler.start_page(self.capacity) + 1}"
            )

        if not converged:
            # The last iteration may have fixed the last straddler
            converged = self._find_straddler(self.canonical.measure(), oversized) is None

        content_height = self.canonical.content_height()
        return LayoutResult(
            corrections=corrections,
            page_count=page_count_for(content_height, self.capacity),
            content_height=content_height,
            capacity=self.capacity,
            iterations=iterations,
            converged=converged,
            oversized=oversized,
        )

    @staticmethod
    def _apply_corrections(view: FlowView, corrections: Dict[int, float]) -> None:
        view.clear_margins()
        for ordinal, margin in corrections.items():
            view.set_margin(ordinal, margin)

    def recompute(self) -> LayoutResult:
        """
        Re-run pagination against the current rendering.

        Returns:
            The new LayoutResult (or the previous one for a reentrant call)
        """
        if self._running:
            _log_debug("recompute() called during a pass, returning previous result")
            return self._result

        self._running = True
        try:
            result = self._relax()
            for view in self._replicas:
                self._apply_corrections(view, result.corrections)
            self._result = result
        finally:
            self._running = False

        log_layout_result(result)
        for callback in list(self._listeners):
            callback(result)
        return result


def paginate(
    blocks: Iterable[BlockGeometry],
    content_height: float = None,
    capacity: float = CONTENT_HEIGHT,
    max_iterations: int = MAX_RELAXATION_ITERATIONS,
) -> LayoutResult:
    """
    Paginate fixed block geometry measured against one infinite-height rendering.

    Args:
        blocks: Natural block geometry (no corrective margins applied)
        content_height: Natural total content height (defaults to the lowest block bottom)
        capacity: Page capacity
        max_iterations: Cap on measurement passes

    Returns:
        LayoutResult with corrections by ordinal and the page count

    Examples:
        >>> paginate([BlockGeometry(ordinal=0, top=900, bottom=1200)]).corrections
        {0: 143.0}
    """
    engine = PaginationEngine(StaticFlow(blocks, content_height), capacity, max_iterations)
    return engine.recompute()
