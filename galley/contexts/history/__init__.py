"""
History Context

Responsibilities:
- Applies edits to the visible document value immediately
- Coalesces bursts of edits into single undo steps (debounce)
- Provides undo/redo with branch overwrite and a bounded history length

Owns: History entries, cursor, debounce timer
Never: Inspects the shape of the value it stores
"""

from galley.contexts.history.manager import HistoryManager
from galley.contexts.history.shortcuts import handle_shortcut
from galley.contexts.history.timers import (
    EventLoopScheduler,
    ManualScheduler,
    Scheduler,
    default_scheduler,
)

__all__ = [
    "HistoryManager",
    "handle_shortcut",
    "Scheduler",
    "EventLoopScheduler",
    "ManualScheduler",
    "default_scheduler",
]
