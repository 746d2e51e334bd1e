"""
Current-shape Document Normalization

Brings a document that already carries (or should carry) the version 2 shape
into canonical form. Earlier editor releases wrote intermediate sub-shapes
that are still version 2 on the surface:

1. Grouped skills ({name, level, keywords[]}) instead of a flat string list
2. Per-entry "highlights" lists next to a plain summary/description
3. Flat "linkedin"/"github" URL fields on basics instead of profile entries
4. Meta blocks missing seniority (or other fields added later)

Operations performed (in order):
1. Tag schemaVersion
2. Backfill basics, location and profiles; synthesize flat profile URLs
3. Backfill list sections
4. Flatten grouped skills
5. Merge highlights into rich text
6. Backfill meta defaults

Every step leaves already-normalized data untouched, so normalizing twice
gives the same result as normalizing once. Existing values are never
overwritten except where a legacy sub-shape is converted.
"""

import copy
from typing import Any, Dict, List

from galley.contexts.migration.coerce import as_str, as_str_list
from galley.contexts.migration.defaults import (
    BASICS_STRING_FIELDS,
    HIGHLIGHT_TARGETS,
    LIST_SECTIONS,
    LOCATION_STRING_FIELDS,
    PROFILE_URL_FIELDS,
    SCHEMA_VERSION,
    get_default_basics,
    get_default_location,
    get_default_meta,
)
from galley.contexts.migration.logger import _log_debug, _log_warning
from galley.contexts.migration.profiles import synthesize_profiles
from galley.utils.text_processing import highlights_to_html

# Meta fields that must never be blank (an empty string gets the default too)
REQUIRED_META_FIELDS = ["version", "countryCode", "jobCategory", "seniority"]


def _fill_missing(target: Dict[str, Any], defaults: Dict[str, Any]) -> None:
    """Set each default whose key is missing or None in target, in-place."""
    for key, default_value in defaults.items():
        if target.get(key) is None:
            target[key] = default_value


def _normalize_basics(data: Dict[str, Any]) -> None:
    """
    Backfill basics in-place and move flat profile URLs into basics.profiles.

    Args:
        data: Document with (possibly missing) basics
    """
    basics = data.get("basics")
    if not isinstance(basics, dict):
        if basics is not None:
            _log_warning(f"basics is {type(basics).__name__}, replacing with empty basics")
        data["basics"] = get_default_basics()
        return

    _fill_missing(basics, {field: "" for field in BASICS_STRING_FIELDS})

    location = basics.get("location")
    if not isinstance(location, dict):
        basics["location"] = get_default_location()
    else:
        _fill_missing(location, {field: "" for field in LOCATION_STRING_FIELDS})
        _fill_missing(location, {"countryCode": get_default_location()["countryCode"]})

    if not isinstance(basics.get("profiles"), list):
        basics["profiles"] = []

    if any(field in basics for field in PROFILE_URL_FIELDS):
        basics["profiles"] = synthesize_profiles(basics["profiles"], basics)
        for field in PROFILE_URL_FIELDS:
            basics.pop(field, None)
        _log_debug("Moved flat profile URLs into basics.profiles")


def _normalize_sections(data: Dict[str, Any]) -> None:
    """Ensure every list section exists and is a list, in-place."""
    for section in LIST_SECTIONS:
        value = data.get(section)
        if value is None:
            data[section] = []
        elif not isinstance(value, list):
            _log_warning(f"'{section}' is {type(value).__name__}, replacing with empty list")
            data[section] = []


def flatten_skills(skills: List[Any]) -> List[str]:
    """
    Flatten grouped skill objects into a plain list of skill names.

    A group contributes its keywords, or its name when it has no keywords.
    Plain string entries are kept as they are.

    Examples:
        >>> flatten_skills([{"name": "Frontend", "level": "Expert", "keywords": ["React", "CSS"]}])
        ['React', 'CSS']
        >>> flatten_skills([{"name": "Leadership", "keywords": []}])
        ['Leadership']
    """
    flat = []
    for skill in skills:
        if isinstance(skill, str):
            flat.append(skill)
        elif isinstance(skill, dict):
            keywords = [k for k in as_str_list(skill.get("keywords")) if k]
            if keywords:
                flat.extend(keywords)
            elif as_str(skill.get("name")):
                flat.append(skill["name"])
    return flat


def _normalize_skills(data: Dict[str, Any]) -> None:
    """Flatten grouped skills in-place (no-op for an already flat list)."""
    skills = data["skills"]
    if any(not isinstance(skill, str) for skill in skills):
        data["skills"] = flatten_skills(skills)
        _log_debug(f"Flattened {len(skills)} skill groups into {len(data['skills'])} skills")


def merge_highlights(entry: Dict[str, Any], target_field: str) -> Dict[str, Any]:
    """
    Fold an entry's "highlights" list into its rich-text field, in-place.

    The existing text becomes a paragraph and the highlights a bullet list.
    The "highlights" key is removed whether or not it held anything.

    Args:
        entry: Work, volunteer or project entry
        target_field: "summary" or "description"

    Returns:
        The same entry
    """
    if "highlights" not in entry:
        return entry

    highlights = as_str_list(entry.pop("highlights"))
    if highlights:
        entry[target_field] = highlights_to_html(highlights, as_str(entry.get(target_field)))
    return entry


def _normalize_highlights(data: Dict[str, Any]) -> None:
    """Merge highlights on every work, volunteer and project entry, in-place."""
    for section, target_field in HIGHLIGHT_TARGETS.items():
        merged = 0
        for entry in data[section]:
            if isinstance(entry, dict) and "highlights" in entry:
                merge_highlights(entry, target_field)
                merged += 1
        if merged:
            _log_debug(f"Merged highlights into {target_field} on {merged} {section} entries")


def _normalize_meta(data: Dict[str, Any]) -> None:
    """Backfill meta defaults in-place (seniority "mid", country "US", ...)."""
    meta = data.get("meta")
    if not isinstance(meta, dict):
        meta = {}
        data["meta"] = meta

    defaults = get_default_meta()
    for field in REQUIRED_META_FIELDS:
        if not meta.get(field):
            meta[field] = defaults[field]
    _fill_missing(meta, defaults)


def normalize_current(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Canonicalize a current-shape document.

    Does not modify its argument.

    Args:
        document: Document dict that is not legacy (see is_legacy_document())

    Returns:
        New normalized document
    """
    data = copy.deepcopy(document)

    if data.get("schemaVersion") is None:
        data["schemaVersion"] = SCHEMA_VERSION
    _normalize_basics(data)
    _normalize_sections(data)
    _normalize_skills(data)
    _normalize_highlights(data)
    _normalize_meta(data)

    return data
