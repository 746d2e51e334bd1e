"""
Debounced undo/redo history over an opaque document value.

Edits apply to the visible value immediately; committing them to history is
deferred until edits pause for debounce_ms, so a burst of keystrokes becomes
one undo step.

State machine (cursor, pending timer):

    edit        -> value updated, timer (re)started
    timer fires -> entries after cursor dropped, value appended, oldest
                   entries evicted beyond max_history, cursor at the end
    undo        -> pending edit flushed first, cursor - 1, value restored
    redo        -> no-op at the newest entry (a pending edit stays pending);
                   otherwise pending edit dropped, cursor + 1, value restored
    reset       -> timer cancelled, history = [value], cursor 0

Values restored by undo/redo go through a separate apply path that never
starts a timer, so stepping through history cannot commit a new entry and
truncate the forward branch.
"""

from typing import Callable, Generic, List, Optional, TypeVar, Union

from galley.contexts.history.logger import _log_debug
from galley.contexts.history.timers import Scheduler, TimerHandle, default_scheduler
from galley.utils.config import get_config

T = TypeVar("T")

_HISTORY_CONFIG = get_config()["history"]
DEFAULT_MAX_HISTORY = _HISTORY_CONFIG["max_history"]
DEFAULT_DEBOUNCE_MS = _HISTORY_CONFIG["debounce_ms"]


class HistoryManager(Generic[T]):
    """
    Undo/redo history for one editor session.

    Args:
        initial: Starting value (becomes the only history entry)
        max_history: Maximum number of entries kept; oldest are evicted first
        debounce_ms: Quiet period after the last edit before it is committed
        scheduler: Timer source (see default_scheduler())

    Example:
        history = HistoryManager(document, scheduler=ManualScheduler())
        history.set(lambda doc: {**doc, "skills": ["Python"]})
        history.undo()  # back to document, the edit is redoable
    """

    def __init__(
        self,
        initial: T,
        max_history: int = DEFAULT_MAX_HISTORY,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        scheduler: Optional[Scheduler] = None,
    ):
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")

        self.max_history = max_history
        self.debounce_ms = debounce_ms
        self.scheduler = scheduler or default_scheduler()

        self._value = initial
        self._entries: List[T] = [initial]
        self._cursor = 0
        self._timer: Optional[TimerHandle] = None
        self._listeners: List[Callable[[T], None]] = []

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def value(self) -> T:
        """The visible value (may be ahead of history while an edit is pending)."""
        return self._value

    @property
    def entries(self) -> List[T]:
        """Copy of the committed history entries, oldest first."""
        return list(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def has_pending(self) -> bool:
        """True while an edit is waiting for its debounce timer."""
        return self._timer is not None

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0 or self._timer is not None

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register a callback invoked with the new value after every change.

        Returns:
            Function that removes the callback
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self._value)

    # ------------------------------------------------------------------
    # Internal transitions
    # ------------------------------------------------------------------

    def _apply(self, value: T, record: bool) -> None:
        """
        Make value visible.

        Args:
            value: New visible value
            record: True for user edits (schedule a commit); False for values
                restored from history
        """
        self._value = value
        if record:
            self._cancel_timer()
            self._timer = self.scheduler.call_later(
                self.debounce_ms / 1000, lambda: self._on_timer(value)
            )
        self._notify()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self, value: T) -> None:
        self._timer = None
        self._commit(value)

    def _commit(self, value: T) -> None:
        """Append value after the cursor, discarding the forward branch and evicting overflow."""
        discarded = len(self._entries) - (self._cursor + 1)
        del self._entries[self._cursor + 1 :]
        self._entries.append(value)

        evicted = max(0, len(self._entries) - self.max_history)
        if evicted:
            del self._entries[:evicted]

        self._cursor = len(self._entries) - 1
        _log_debug(
            f"Committed entry {self._cursor + 1}/{len(self._entries)}"
            f" (discarded {discarded} redo, evicted {evicted})"
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def set(self, value: Union[T, Callable[[T], T]]) -> None:
        """
        Apply an edit immediately and (re)start the debounce timer.

        Args:
            value: New value, or an updater called with the current value.
                Any callable is treated as an updater.
        """
        resolved = value(self._value) if callable(value) else value
        self._apply(resolved, record=True)

    def flush(self) -> bool:
        """
        Commit a pending edit now instead of waiting for its timer.

        Returns:
            True if an edit was pending
        """
        if self._timer is None:
            return False
        self._cancel_timer()
        self._commit(self._value)
        return True

    def undo(self) -> None:
        """Step back one entry. Silent no-op when there is nothing to undo."""
        if not self.can_undo:
            _log_debug("Undo ignored: at oldest entry with no pending edit")
            return

        self.flush()
        if self._cursor == 0:
            return
        self._cursor -= 1
        self._apply(self._entries[self._cursor], record=False)

    def redo(self) -> None:
        """
        Step forward one entry. Silent no-op when there is nothing to redo.

        An edit still waiting for its timer is dropped, not committed.
        """
        if not self.can_redo:
            _log_debug("Redo ignored: at newest entry")
            return

        if self._timer is not None:
            self._cancel_timer()
            _log_debug("Redo dropped an uncommitted edit")
        self._cursor += 1
        self._apply(self._entries[self._cursor], record=False)

    def reset(self, value: T) -> None:
        """Discard all history and start over from value (e.g. a different document was loaded)."""
        self._cancel_timer()
        self._entries = [value]
        self._cursor = 0
        self._apply(value, record=False)
