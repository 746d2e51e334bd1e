"""
GALLEY - document state & layout engine for a paginated resume editor

Keeps one resume document correct through its lifecycle: loaded, edited,
and previewed as a stack of fixed-size printable pages.

Architecture:
- Migration Context: Lifts stored documents of any schema version to the current shape
- History Context: Debounced undo/redo over the edited document value
- Layout Context: Pagination of one flowed rendering into fixed-capacity pages
"""

__version__ = "0.1.0"
