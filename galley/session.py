"""
Editor session: the three contexts wired together.

    stored data --load_document--> current document --HistoryManager--> visible value
                                                                              |
                                          render(value) -> FlowView <---------+
                                                                              |
                                          PaginationEngine.recompute() <------+

Migration runs when a document is opened (at construction or through
open()). Every change of the visible
value (edit, undo, redo) re-renders the canonical copy and re-runs
pagination against it.
"""

from typing import Any, Callable, Dict, Optional

from galley.contexts.history import HistoryManager, Scheduler, handle_shortcut
from galley.contexts.history.manager import DEFAULT_DEBOUNCE_MS, DEFAULT_MAX_HISTORY
from galley.contexts.layout import CONTENT_HEIGHT, FlowView, LayoutResult, PaginationEngine
from galley.contexts.migration import LoadResult, load_document, to_json_resume
from galley.utils.timestamp import now

Document = Dict[str, Any]


class EditorSession:
    """
    One open document.

    Args:
        raw: Stored data as returned by the storage collaborator
        render: Renders a document and returns the canonical FlowView for it
        capacity: Page capacity
        max_history: History length
        debounce_ms: Edit coalescing window
        scheduler: Timer source for the history debounce

    Attributes:
        load_error: Why the stored data could not be read (None if it loaded);
            when set, the session was opened on an empty document
        migrated: True if the stored data was a legacy document
    """

    def __init__(
        self,
        raw: Any,
        render: Callable[[Document], FlowView],
        capacity: float = CONTENT_HEIGHT,
        max_history: int = DEFAULT_MAX_HISTORY,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        scheduler: Optional[Scheduler] = None,
    ):
        loaded = self._load(raw)

        self.render = render
        self.history: HistoryManager[Document] = HistoryManager(
            loaded.document,
            max_history=max_history,
            debounce_ms=debounce_ms,
            scheduler=scheduler,
        )
        self.engine = PaginationEngine(render(loaded.document), capacity=capacity)
        self.engine.recompute()
        self._unsubscribe = self.history.subscribe(self._on_change)

    def _load(self, raw: Any) -> LoadResult:
        loaded = load_document(raw)
        self.load_error = loaded.error
        self.migrated = loaded.migrated
        return loaded

    def _on_change(self, document: Document) -> None:
        self.engine.canonical = self.render(document)
        self.engine.recompute()

    @property
    def document(self) -> Document:
        return self.history.value

    @property
    def layout(self) -> LayoutResult:
        return self.engine.result

    @property
    def page_count(self) -> int:
        return self.engine.page_count

    def edit(self, value) -> None:
        """Apply an edit (a new document or an updater function)."""
        self.history.set(value)

    def undo(self) -> None:
        self.history.undo()

    def redo(self) -> None:
        self.history.redo()

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False, shift: bool = False) -> bool:
        """Dispatch a keyboard shortcut; True if it was an undo/redo shortcut."""
        return handle_shortcut(self.history, key, ctrl=ctrl, meta=meta, shift=shift)

    def open(self, raw: Any) -> None:
        """
        Replace the open document with other stored data.

        History starts over from the loaded document; load_error and migrated
        describe the new load.
        """
        loaded = self._load(raw)
        self.history.reset(loaded.document)

    def save(self) -> Document:
        """
        Commit any pending edit and return the document to persist.

        The returned copy carries the save time in meta.lastModified.
        """
        self.history.flush()
        document = self.history.value
        return {**document, "meta": {**document.get("meta", {}), "lastModified": now()}}

    def export_json_resume(self) -> Document:
        return to_json_resume(self.save())

    def close(self) -> None:
        self.history.flush()
        self._unsubscribe()
