r"""
Migration chain entry points.

ensure_current() is the single function storage and import paths call to get
a current-shape document from whatever was persisted:

    raw --(legacy fingerprint?)--> migrate_legacy --> normalize_current --> document
        \------------------(no)-------------------/

Both branches finish with normalize_current(), so the output of the chain is
always a fixed point of the chain.

load_document() wraps ensure_current() for callers that must never fail to
open the editor: an unreadable document is replaced with an empty one and
the error is reported alongside it.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from galley.contexts.migration.defaults import empty_document
from galley.contexts.migration.exceptions import InvalidDocumentError
from galley.contexts.migration.legacy import is_legacy_document, migrate_legacy
from galley.contexts.migration.logger import _log_debug, _log_warning
from galley.contexts.migration.normalizer import normalize_current


@dataclass
class LoadResult:
    """Result from load_document()."""

    document: Dict[str, Any]
    migrated: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def ensure_current(raw: Any) -> Dict[str, Any]:
    """
    Lift stored data of any schema version into the current document shape.

    Pure: raw is never modified. Idempotent: ensure_current(ensure_current(x))
    equals ensure_current(x). Missing fields are defaulted rather than
    rejected.

    Args:
        raw: Parsed stored data (whatever the storage collaborator returned)

    Returns:
        Current-shape document

    Raises:
        InvalidDocumentError: If raw is not a JSON object (e.g. a list, string or None)
    """
    if not isinstance(raw, dict):
        raise InvalidDocumentError(
            "Document root must be an object",
            reason="not_an_object",
            value_type=type(raw).__name__,
        )

    if is_legacy_document(raw):
        _log_debug("Legacy fingerprint detected, migrating to current schema")
        return normalize_current(migrate_legacy(raw))

    return normalize_current(raw)


def loads_document(text: str) -> Dict[str, Any]:
    """
    Parse JSON text and lift it into the current document shape.

    Raises:
        InvalidDocumentError: If text is not valid JSON or its root is not an object
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(
            f"Document is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            reason="malformed_json",
        ) from e
    return ensure_current(raw)


def load_document(raw: Any) -> LoadResult:
    """
    Load stored data for editing, substituting an empty document if unreadable.

    Args:
        raw: Parsed stored data

    Returns:
        LoadResult with the current-shape document; error is set (and the
        document is empty) when raw could not be read
    """
    try:
        migrated = is_legacy_document(raw)
        return LoadResult(document=ensure_current(raw), migrated=migrated)
    except InvalidDocumentError as e:
        _log_warning(f"Stored document could not be read: {e}")
        return LoadResult(document=empty_document(), error=str(e))
