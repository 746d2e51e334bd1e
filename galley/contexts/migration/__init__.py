"""
Migration Context

Responsibilities:
- Detects legacy (untagged, version 1) documents
- Maps legacy documents onto the current schema
- Normalizes intermediate sub-shapes inside current-schema documents
- Converts to and from the public JSON Resume format

Owns: Document schema shape, schema defaults, structural document errors
Never: Reads or writes storage, validates business rules
"""

from galley.contexts.migration.chain import (
    LoadResult,
    ensure_current,
    load_document,
    loads_document,
)
from galley.contexts.migration.defaults import SCHEMA_VERSION, empty_document
from galley.contexts.migration.exceptions import GalleyError, InvalidDocumentError
from galley.contexts.migration.json_resume import import_json_resume, to_json_resume
from galley.contexts.migration.legacy import is_legacy_document, migrate_legacy
from galley.contexts.migration.normalizer import normalize_current

__all__ = [
    # Chain entry points
    "ensure_current",
    "load_document",
    "loads_document",
    "LoadResult",
    # Individual steps
    "is_legacy_document",
    "migrate_legacy",
    "normalize_current",
    # JSON Resume interchange
    "import_json_resume",
    "to_json_resume",
    # Shape and errors
    "SCHEMA_VERSION",
    "empty_document",
    "GalleyError",
    "InvalidDocumentError",
]
