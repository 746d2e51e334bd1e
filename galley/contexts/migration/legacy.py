"""
Legacy (version 1) document migration.

Version 1 documents predate the schema tag. They hold flat top-level fields:

    name, title, email, phone, location, linkedin, github, summary,
    skills: [str],
    experience: [{role, company, startDate, endDate, location, bullets}],
    education: [{degree, school, startDate, endDate, location}],
    projects: [{name, description, techStack, liveUrl?, sourceUrl?}],
    strengths: [str]

migrate_legacy() maps every one of those fields onto the current shape.
Fields JSON Resume has no slot for (an education location, a project's
second URL) are carried over as extension keys on the entry.
"""

from typing import Any, Dict, List

from galley.contexts.migration.coerce import as_dict, as_list, as_str, as_str_list
from galley.contexts.migration.defaults import empty_document
from galley.contexts.migration.profiles import synthesize_profiles
from galley.utils.text_processing import highlights_to_html


def is_legacy_document(raw: Any) -> bool:
    """
    Check whether raw data has the version 1 fingerprint.

    A document is legacy when it has no schemaVersion tag, a top-level "name",
    and a "skills" list made only of plain strings. An empty skills list still
    counts as legacy.

    Args:
        raw: Parsed stored data of unknown shape

    Returns:
        True if raw should go through migrate_legacy()
    """
    if not isinstance(raw, dict):
        return False
    if "schemaVersion" in raw or "name" not in raw:
        return False
    skills = raw.get("skills")
    return isinstance(skills, list) and all(isinstance(skill, str) for skill in skills)


def _split_degree(degree: str):
    """Split "B.S. Computer Science" into ("B.S.", "Computer Science")."""
    if " " not in degree:
        return degree, ""
    study_type, area = degree.split(" ", 1)
    return study_type, area


def _migrate_experience(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": as_str(entry.get("company")),
        "position": as_str(entry.get("role")),
        "url": "",
        "startDate": as_str(entry.get("startDate")),
        "endDate": as_str(entry.get("endDate")),
        "summary": highlights_to_html(as_str_list(entry.get("bullets"))),
        "location": as_str(entry.get("location")),
    }


def _migrate_education(entry: Dict[str, Any]) -> Dict[str, Any]:
    study_type, area = _split_degree(as_str(entry.get("degree")))
    migrated = {
        "institution": as_str(entry.get("school")),
        "area": area,
        "studyType": study_type,
        "startDate": as_str(entry.get("startDate")),
        "endDate": as_str(entry.get("endDate")),
        "score": "",
        "url": "",
        "courses": [],
    }
    location = as_str(entry.get("location"))
    if location:
        migrated["location"] = location
    return migrated


def _migrate_project(entry: Dict[str, Any]) -> Dict[str, Any]:
    live_url = as_str(entry.get("liveUrl"))
    source_url = as_str(entry.get("sourceUrl"))
    migrated = {
        "name": as_str(entry.get("name")),
        "description": as_str(entry.get("description")),
        "keywords": as_str_list(entry.get("techStack")),
        "startDate": "",
        "endDate": "",
        "url": live_url or source_url,
        "roles": [],
        "entity": "",
        "type": "",
    }
    if live_url and source_url and source_url != live_url:
        migrated["sourceUrl"] = source_url
    return migrated


def _entries(raw: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    return [as_dict(entry) for entry in as_list(raw.get(key))]


def migrate_legacy(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a version 1 document onto the current shape.

    Does not modify raw. Missing or mistyped fields fall back to empty values;
    meta fields take their documented defaults (country "US", job category
    "general", seniority "mid").

    Args:
        raw: Legacy document (see is_legacy_document())

    Returns:
        New current-shape document
    """
    document = empty_document()
    basics = document["basics"]

    basics["name"] = as_str(raw.get("name"))
    basics["label"] = as_str(raw.get("title"))
    basics["email"] = as_str(raw.get("email"))
    basics["phone"] = as_str(raw.get("phone"))
    basics["summary"] = as_str(raw.get("summary"))
    basics["location"]["city"] = as_str(raw.get("location"))
    basics["profiles"] = synthesize_profiles([], raw)

    document["work"] = [_migrate_experience(e) for e in _entries(raw, "experience")]
    document["education"] = [_migrate_education(e) for e in _entries(raw, "education")]
    document["skills"] = list(raw.get("skills", []))
    document["projects"] = [_migrate_project(e) for e in _entries(raw, "projects")]

    strengths = as_str_list(raw.get("strengths"))
    if strengths:
        document["interests"] = [{"name": "Strengths", "keywords": strengths}]

    return document
