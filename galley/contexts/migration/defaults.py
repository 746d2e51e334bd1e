"""
Default values for the current (version 2) document shape.

Provides shared defaults used by:
- legacy.py (version 1 -> version 2 field mapping)
- normalizer.py (backfilling missing fields on current-shape documents)
- json_resume.py (JSON Resume import)

Meta defaults (country, job category, seniority, version) come from the
"migration" section of the configuration.
"""

from typing import Any, Dict

from galley.utils.config import get_config

SCHEMA_VERSION = 2

_MIGRATION_CONFIG = get_config()["migration"]
DEFAULT_COUNTRY_CODE = _MIGRATION_CONFIG["country_code"]
DEFAULT_JOB_CATEGORY = _MIGRATION_CONFIG["job_category"]
DEFAULT_SENIORITY = _MIGRATION_CONFIG["seniority"]
DEFAULT_VERSION = _MIGRATION_CONFIG["version"]

# Top-level sections holding lists of entries (skills holds plain strings)
LIST_SECTIONS = [
    "work",
    "education",
    "skills",
    "languages",
    "projects",
    "volunteer",
    "awards",
    "certificates",
    "publications",
    "interests",
    "references",
]

BASICS_STRING_FIELDS = ["name", "label", "email", "phone", "url", "summary"]
LOCATION_STRING_FIELDS = ["address", "city", "region", "postalCode"]

# Country-specific extensions on basics (not part of JSON Resume)
BASICS_EXTENSION_FIELDS = [
    "photo",
    "dateOfBirth",
    "gender",
    "maritalStatus",
    "nationality",
    "fathersName",
    "nationalId",
    "visaStatus",
    "militaryService",
    "religion",
    "bloodType",
]

# Internal meta extensions (not part of JSON Resume)
META_EXTENSION_FIELDS = ["countryCode", "jobCategory"]

# Legacy fields carried over onto entries that JSON Resume has no slot for
LEGACY_CARRYOVER_FIELDS = {
    "education": ["location"],
    "projects": ["sourceUrl"],
}

# Rich-text field that absorbs "highlights" for each entry type
HIGHLIGHT_TARGETS = {
    "work": "summary",
    "volunteer": "summary",
    "projects": "description",
}

# Per-entry field defaults, in JSON Resume field order
ENTRY_FIELDS: Dict[str, Dict[str, Any]] = {
    "work": {
        "name": "",
        "position": "",
        "url": "",
        "startDate": "",
        "endDate": "",
        "summary": "",
        "location": "",
    },
    "education": {
        "institution": "",
        "area": "",
        "studyType": "",
        "startDate": "",
        "endDate": "",
        "score": "",
        "url": "",
        "courses": [],
    },
    "languages": {"language": "", "fluency": ""},
    "projects": {
        "name": "",
        "description": "",
        "keywords": [],
        "startDate": "",
        "endDate": "",
        "url": "",
        "roles": [],
        "entity": "",
        "type": "",
    },
    "volunteer": {
        "organization": "",
        "position": "",
        "url": "",
        "startDate": "",
        "endDate": "",
        "summary": "",
    },
    "awards": {"title": "", "date": "", "awarder": "", "summary": ""},
    "certificates": {"name": "", "date": "", "issuer": "", "url": ""},
    "publications": {"name": "", "publisher": "", "releaseDate": "", "url": "", "summary": ""},
    "interests": {"name": "", "keywords": []},
    "references": {"name": "", "reference": ""},
}

# Networks recognized from a profile URL's host (registrable domain -> display name)
KNOWN_NETWORKS = {
    "linkedin.com": "LinkedIn",
    "github.com": "GitHub",
    "gitlab.com": "GitLab",
    "bitbucket.org": "Bitbucket",
    "twitter.com": "Twitter",
    "x.com": "X",
    "stackoverflow.com": "Stack Overflow",
    "dribbble.com": "Dribbble",
    "behance.net": "Behance",
    "medium.com": "Medium",
}

# Flat basics/legacy fields that hold a profile URL
PROFILE_URL_FIELDS = ["linkedin", "github"]


def get_default_location() -> Dict[str, str]:
    """Empty location with the default country."""
    return {
        "address": "",
        "city": "",
        "region": "",
        "postalCode": "",
        "countryCode": DEFAULT_COUNTRY_CODE,
    }


def get_default_basics() -> Dict[str, Any]:
    """Empty basics block."""
    basics = {field: "" for field in BASICS_STRING_FIELDS}
    basics["location"] = get_default_location()
    basics["profiles"] = []
    return basics


def get_default_meta() -> Dict[str, str]:
    """
    Meta block with every documented default.

    lastModified stays empty; the editor stamps it when a document is saved,
    so migrating the same input twice gives equal documents.
    """
    return {
        "canonical": "",
        "version": DEFAULT_VERSION,
        "lastModified": "",
        "countryCode": DEFAULT_COUNTRY_CODE,
        "jobCategory": DEFAULT_JOB_CATEGORY,
        "seniority": DEFAULT_SENIORITY,
    }


def empty_document() -> Dict[str, Any]:
    """
    Fresh current-shape document with no content.

    Used when a stored document cannot be read, and when a new document
    is created.
    """
    document: Dict[str, Any] = {"schemaVersion": SCHEMA_VERSION, "basics": get_default_basics()}
    for section in LIST_SECTIONS:
        document[section] = []
    document["meta"] = get_default_meta()
    return document
