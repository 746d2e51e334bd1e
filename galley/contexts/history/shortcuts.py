"""
Keyboard shortcut dispatch for history.

    Ctrl+Z / Cmd+Z              -> undo
    Ctrl+Shift+Z / Cmd+Shift+Z  -> redo
    Ctrl+Y / Cmd+Y              -> redo
"""

from galley.contexts.history.manager import HistoryManager


def handle_shortcut(
    history: HistoryManager,
    key: str,
    ctrl: bool = False,
    meta: bool = False,
    shift: bool = False,
) -> bool:
    """
    Run undo or redo if the key combination is a history shortcut.

    Args:
        history: History to act on
        key: Key name as reported by the UI ("z", "Z", "y", ...)
        ctrl: Control held
        meta: Command/Meta held
        shift: Shift held

    Returns:
        True if the event was a history shortcut (the caller should suppress
        its default action), False otherwise
    """
    if not (ctrl or meta):
        return False

    key = key.lower()
    if key == "z" and not shift:
        history.undo()
        return True
    if (key == "z" and shift) or key == "y":
        history.redo()
        return True
    return False
