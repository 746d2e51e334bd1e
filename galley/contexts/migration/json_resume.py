"""
JSON Resume interchange.

import_json_resume() accepts a document in the public JSON Resume format
(https://jsonresume.org/schema/) and produces a current-shape document.
Every field is coerced leniently: wrong types become empty values instead of
errors, since the import collaborator has already validated the business
rules.

to_json_resume() goes the other way, stripping the fields this editor adds
on top of JSON Resume (schema tag, country-specific basics, internal meta
and legacy carry-over keys).
"""

import json
from typing import Any, Dict, List, Union

from galley.contexts.migration.coerce import as_dict, as_list, as_str, as_str_list
from galley.contexts.migration.defaults import (
    BASICS_EXTENSION_FIELDS,
    BASICS_STRING_FIELDS,
    ENTRY_FIELDS,
    HIGHLIGHT_TARGETS,
    LEGACY_CARRYOVER_FIELDS,
    LIST_SECTIONS,
    LOCATION_STRING_FIELDS,
    META_EXTENSION_FIELDS,
    SCHEMA_VERSION,
    get_default_location,
    get_default_meta,
)
from galley.contexts.migration.exceptions import InvalidDocumentError
from galley.contexts.migration.logger import _log_info
from galley.contexts.migration.normalizer import flatten_skills
from galley.utils.text_processing import highlights_to_html

# Fallback source keys for fields some exporters name differently
FIELD_ALIASES = {
    ("work", "name"): "company",
    ("education", "score"): "gpa",
}


def _parse_location(raw: Any) -> Dict[str, str]:
    loc = as_dict(raw)
    location = {field: as_str(loc.get(field)) for field in LOCATION_STRING_FIELDS}
    location["countryCode"] = as_str(loc.get("countryCode"), get_default_location()["countryCode"])
    return location


def _parse_profile(raw: Any) -> Dict[str, str]:
    p = as_dict(raw)
    return {"network": as_str(p.get("network")), "username": as_str(p.get("username")), "url": as_str(p.get("url"))}


def _parse_basics(raw: Any) -> Dict[str, Any]:
    b = as_dict(raw)
    basics: Dict[str, Any] = {field: as_str(b.get(field)) for field in BASICS_STRING_FIELDS}
    basics["location"] = _parse_location(b.get("location"))
    basics["profiles"] = [_parse_profile(p) for p in as_list(b.get("profiles"))]

    # Preserve country-specific extensions if present
    for field in BASICS_EXTENSION_FIELDS:
        if field in b:
            basics[field] = as_str(b[field])
    return basics


def _parse_entry(section: str, raw: Any) -> Dict[str, Any]:
    """Coerce one section entry to its field defaults, merging highlights if any."""
    e = as_dict(raw)
    entry: Dict[str, Any] = {}
    for field, default in ENTRY_FIELDS[section].items():
        value = e.get(field)
        alias = FIELD_ALIASES.get((section, field))
        if isinstance(default, list):
            entry[field] = as_str_list(value)
        else:
            entry[field] = as_str(value) or (as_str(e.get(alias)) if alias else "")

    target_field = HIGHLIGHT_TARGETS.get(section)
    if target_field:
        highlights = as_str_list(e.get("highlights"))
        entry[target_field] = highlights_to_html(highlights, entry[target_field])
    return entry


def _parse_skills(raw: Any) -> List[str]:
    return [skill for skill in flatten_skills(as_list(raw)) if skill]


def _parse_meta(raw: Any) -> Dict[str, str]:
    m = as_dict(raw)
    return {field: as_str(m.get(field), default) for field, default in get_default_meta().items()}


def import_json_resume(raw: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convert a JSON Resume document into a current-shape document.

    - Parses all standard JSON Resume sections
    - Flattens grouped skills to a flat string list
    - Merges highlights arrays into rich-text summaries/descriptions
    - Defaults meta countryCode to "US", jobCategory to "general", seniority to "mid"
    - Handles missing fields gracefully with empty strings/lists

    Args:
        raw: JSON Resume object, or its JSON text

    Returns:
        Current-shape document

    Raises:
        InvalidDocumentError: If the text is not JSON or the root is not an object
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidDocumentError(
                f"JSON Resume is not valid JSON: {e.msg}", reason="malformed_json"
            ) from e

    if not isinstance(raw, dict):
        raise InvalidDocumentError(
            "Invalid JSON Resume: expected an object at the root level",
            reason="not_an_object",
            value_type=type(raw).__name__,
        )

    document: Dict[str, Any] = {"schemaVersion": SCHEMA_VERSION, "basics": _parse_basics(raw.get("basics"))}
    for section in LIST_SECTIONS:
        if section == "skills":
            document["skills"] = _parse_skills(raw.get("skills"))
        else:
            document[section] = [_parse_entry(section, e) for e in as_list(raw.get(section))]
    document["meta"] = _parse_meta(raw.get("meta"))

    _log_info(
        f"Imported JSON Resume for '{document['basics']['name'] or 'unnamed'}' "
        f"({len(document['work'])} work, {len(document['skills'])} skills)"
    )
    return document


def to_json_resume(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a current-shape document to a standard JSON Resume object.

    Strips:
    - schemaVersion (internal field)
    - Country-specific extension fields on basics
    - meta.countryCode and meta.jobCategory
    - Legacy carry-over keys on education and project entries

    Args:
        document: Current-shape document (not modified)

    Returns:
        New dict conforming to the JSON Resume schema
    """
    basics = {k: v for k, v in document["basics"].items() if k not in BASICS_EXTENSION_FIELDS}
    meta = {k: v for k, v in document["meta"].items() if k not in META_EXTENSION_FIELDS}

    resume: Dict[str, Any] = {"basics": basics}
    for section in LIST_SECTIONS:
        carryover = LEGACY_CARRYOVER_FIELDS.get(section, [])
        resume[section] = [
            {k: v for k, v in entry.items() if k not in carryover} if isinstance(entry, dict) else entry
            for entry in document[section]
        ]
    resume["meta"] = meta
    return resume
