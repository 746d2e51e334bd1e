"""
Unit tests for the migration chain.

Tests legacy detection, legacy field mapping, current-shape normalization
and the ensure_current/load_document entry points in
galley.contexts.migration.
"""

import copy

import pytest

from galley.contexts.migration import (
    InvalidDocumentError,
    empty_document,
    ensure_current,
    is_legacy_document,
    load_document,
    loads_document,
    migrate_legacy,
    normalize_current,
)
from galley.contexts.migration.normalizer import flatten_skills, merge_highlights
from galley.contexts.migration.profiles import infer_network, profile_from_url, synthesize_profiles
from galley.utils.text_processing import escape_html, highlights_to_html

LEGACY_DOCUMENT = {
    "name": "Alex Johnson",
    "title": "Software Engineer",
    "email": "alex@example.com",
    "phone": "555-0100",
    "location": "Austin, TX",
    "linkedin": "https://www.linkedin.com/in/alexjohnson",
    "github": "github.com/alexj",
    "summary": "Builds editors",
    "skills": ["Python", "SQL"],
    "experience": [
        {
            "role": "Engineer",
            "company": "Acme",
            "startDate": "2020-01",
            "endDate": "2023-06",
            "location": "Remote",
            "bullets": ["Shipped X", "Cut costs <40%"],
        }
    ],
    "education": [
        {
            "degree": "B.S. Computer Science",
            "school": "UT Austin",
            "startDate": "2014",
            "endDate": "2018",
            "location": "Austin",
        }
    ],
    "projects": [
        {
            "name": "Galley",
            "description": "Resume editor",
            "techStack": ["Python", "TypeScript"],
            "liveUrl": "https://galley.dev",
            "sourceUrl": "https://github.com/alexj/galley",
        }
    ],
    "strengths": ["Focus", "Mentoring"],
}

GROUPED_SKILLS_DOCUMENT = {
    "schemaVersion": 2,
    "basics": {"name": "Sam"},
    "skills": [
        {"name": "Frontend", "level": "Expert", "keywords": ["React", "CSS"]},
        {"name": "Leadership", "keywords": []},
    ],
}


@pytest.mark.unit
class TestIsLegacyDocument:
    """Tests for the version 1 fingerprint."""

    def test_flat_document_with_string_skills(self):
        assert is_legacy_document(LEGACY_DOCUMENT)

    def test_empty_skills_still_legacy(self):
        assert is_legacy_document({"name": "Alex", "skills": []})

    def test_schema_tag_means_current(self):
        assert not is_legacy_document({"schemaVersion": 2, "name": "Alex", "skills": ["Python"]})

    def test_grouped_skills_mean_current(self):
        assert not is_legacy_document({"name": "Alex", "skills": [{"name": "Web", "keywords": []}]})

    def test_missing_name(self):
        assert not is_legacy_document({"skills": ["Python"]})

    def test_non_object(self):
        assert not is_legacy_document(["name", "skills"])
        assert not is_legacy_document(None)


@pytest.mark.unit
class TestMigrateLegacy:
    """Tests for version 1 -> version 2 field mapping."""

    def test_basics_mapping(self):
        basics = migrate_legacy(LEGACY_DOCUMENT)["basics"]

        assert basics["name"] == "Alex Johnson"
        assert basics["label"] == "Software Engineer"
        assert basics["email"] == "alex@example.com"
        assert basics["phone"] == "555-0100"
        assert basics["summary"] == "Builds editors"
        assert basics["location"]["city"] == "Austin, TX"
        assert basics["location"]["countryCode"] == "US"

    def test_profiles_synthesized_from_flat_urls(self):
        profiles = migrate_legacy(LEGACY_DOCUMENT)["basics"]["profiles"]

        assert profiles == [
            {"network": "LinkedIn", "username": "alexjohnson", "url": "https://www.linkedin.com/in/alexjohnson"},
            {"network": "GitHub", "username": "alexj", "url": "github.com/alexj"},
        ]

    def test_experience_becomes_work_with_html_summary(self):
        work = migrate_legacy(LEGACY_DOCUMENT)["work"]

        assert len(work) == 1
        assert work[0]["name"] == "Acme"
        assert work[0]["position"] == "Engineer"
        assert work[0]["location"] == "Remote"
        assert work[0]["summary"] == "<ul><li>Shipped X</li><li>Cut costs &lt;40%</li></ul>"

    def test_degree_split_into_study_type_and_area(self):
        education = migrate_legacy(LEGACY_DOCUMENT)["education"][0]

        assert education["institution"] == "UT Austin"
        assert education["studyType"] == "B.S."
        assert education["area"] == "Computer Science"
        assert education["location"] == "Austin"

    def test_project_urls(self):
        project = migrate_legacy(LEGACY_DOCUMENT)["projects"][0]

        assert project["url"] == "https://galley.dev"
        assert project["sourceUrl"] == "https://github.com/alexj/galley"
        assert project["keywords"] == ["Python", "TypeScript"]

    def test_project_with_only_source_url(self):
        raw = {"name": "A", "skills": [], "projects": [{"name": "P", "sourceUrl": "https://git.example/p"}]}
        project = migrate_legacy(raw)["projects"][0]

        assert project["url"] == "https://git.example/p"
        assert "sourceUrl" not in project

    def test_strengths_become_interest(self):
        interests = migrate_legacy(LEGACY_DOCUMENT)["interests"]
        assert interests == [{"name": "Strengths", "keywords": ["Focus", "Mentoring"]}]

    def test_meta_defaults(self):
        meta = migrate_legacy(LEGACY_DOCUMENT)["meta"]

        assert meta["countryCode"] == "US"
        assert meta["jobCategory"] == "general"
        assert meta["seniority"] == "mid"
        assert meta["lastModified"] == ""

    def test_mistyped_fields_fall_back_to_empty(self):
        raw = {"name": 42, "skills": [], "experience": "oops", "education": [None]}
        document = migrate_legacy(raw)

        assert document["basics"]["name"] == ""
        assert document["work"] == []
        assert document["education"][0]["institution"] == ""


@pytest.mark.unit
class TestNormalizeCurrent:
    """Tests for intermediate sub-shape normalization."""

    def test_grouped_skills_flattened(self):
        document = normalize_current(GROUPED_SKILLS_DOCUMENT)
        assert document["skills"] == ["React", "CSS", "Leadership"]

    def test_flat_skills_untouched(self):
        document = normalize_current({"schemaVersion": 2, "skills": ["Go", "Rust"]})
        assert document["skills"] == ["Go", "Rust"]

    def test_work_highlights_merged_into_summary(self):
        raw = {"schemaVersion": 2, "work": [{"name": "Acme", "summary": "Led team", "highlights": ["Shipped X"]}]}
        entry = normalize_current(raw)["work"][0]

        assert entry["summary"] == "<p>Led team</p><ul><li>Shipped X</li></ul>"
        assert "highlights" not in entry

    def test_project_highlights_merged_into_description(self):
        raw = {"schemaVersion": 2, "projects": [{"name": "P", "description": "", "highlights": ["Fast"]}]}
        entry = normalize_current(raw)["projects"][0]

        assert entry["description"] == "<ul><li>Fast</li></ul>"

    def test_empty_highlights_removed_without_touching_summary(self):
        raw = {"schemaVersion": 2, "volunteer": [{"summary": "Helped", "highlights": []}]}
        entry = normalize_current(raw)["volunteer"][0]

        assert entry == {"summary": "Helped"}

    def test_flat_profile_urls_moved_into_profiles(self):
        raw = {"schemaVersion": 2, "basics": {"name": "Sam", "github": "https://github.com/sam"}}
        basics = normalize_current(raw)["basics"]

        assert basics["profiles"] == [{"network": "GitHub", "username": "sam", "url": "https://github.com/sam"}]
        assert "github" not in basics

    def test_meta_backfilled(self):
        raw = {"schemaVersion": 2, "meta": {"version": "", "seniority": None, "canonical": "https://alex.dev"}}
        meta = normalize_current(raw)["meta"]

        assert meta["version"] == "1.0.0"
        assert meta["seniority"] == "mid"
        assert meta["jobCategory"] == "general"
        assert meta["canonical"] == "https://alex.dev"

    def test_existing_meta_kept(self):
        raw = {"schemaVersion": 2, "meta": {"seniority": "senior", "countryCode": "DE", "lastModified": "2024-01-01"}}
        meta = normalize_current(raw)["meta"]

        assert meta["seniority"] == "senior"
        assert meta["countryCode"] == "DE"
        assert meta["lastModified"] == "2024-01-01"

    def test_non_list_section_replaced(self):
        document = normalize_current({"schemaVersion": 2, "work": "oops"})
        assert document["work"] == []

    def test_input_not_modified(self):
        raw = copy.deepcopy(GROUPED_SKILLS_DOCUMENT)
        normalize_current(raw)
        assert raw == GROUPED_SKILLS_DOCUMENT


@pytest.mark.unit
class TestEnsureCurrent:
    """Tests for the chain entry point."""

    @pytest.mark.parametrize(
        "raw",
        [LEGACY_DOCUMENT, GROUPED_SKILLS_DOCUMENT, {}, {"schemaVersion": 2, "basics": None}],
        ids=["legacy", "grouped_skills", "empty_object", "null_basics"],
    )
    def test_idempotent(self, raw):
        once = ensure_current(raw)
        assert ensure_current(once) == once

    @pytest.mark.parametrize(
        "raw",
        [LEGACY_DOCUMENT, GROUPED_SKILLS_DOCUMENT, {}, {"name": "A", "skills": ["x"]}],
        ids=["legacy", "grouped_skills", "empty_object", "minimal_legacy"],
    )
    def test_repeated_runs_give_equal_documents(self, raw):
        assert ensure_current(raw) == ensure_current(raw)

    def test_last_modified_carried_over(self):
        raw = {"schemaVersion": 2, "meta": {"lastModified": "2024-05-01T10:00:00.000Z"}}
        assert ensure_current(raw)["meta"]["lastModified"] == "2024-05-01T10:00:00.000Z"

    def test_legacy_document_migrated(self):
        document = ensure_current(LEGACY_DOCUMENT)

        assert document["schemaVersion"] == 2
        assert document["basics"]["name"] == "Alex Johnson"
        assert document["skills"] == ["Python", "SQL"]

    def test_input_not_modified(self):
        raw = copy.deepcopy(LEGACY_DOCUMENT)
        ensure_current(raw)
        assert raw == LEGACY_DOCUMENT

    def test_empty_object_gets_full_shape(self):
        document = ensure_current({})
        assert document == empty_document()

    @pytest.mark.parametrize(
        "raw, value_type",
        [([1, 2], "list"), ("resume", "str"), (None, "NoneType"), (7, "int")],
    )
    def test_non_object_root_rejected(self, raw, value_type):
        with pytest.raises(InvalidDocumentError) as exc_info:
            ensure_current(raw)

        assert exc_info.value.reason == "not_an_object"
        assert exc_info.value.value_type == value_type
        assert f"(got {value_type})" in str(exc_info.value)

    def test_invalid_document_error_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_current([])


@pytest.mark.unit
class TestLoadDocument:
    """Tests for the storage-facing loaders."""

    def test_loads_document_parses_text(self):
        document = loads_document('{"name": "Alex", "skills": []}')
        assert document["basics"]["name"] == "Alex"

    def test_loads_document_rejects_malformed_json(self):
        with pytest.raises(InvalidDocumentError) as exc_info:
            loads_document("{not json")
        assert exc_info.value.reason == "malformed_json"

    def test_load_document_reports_migration(self):
        result = load_document(LEGACY_DOCUMENT)

        assert result.success
        assert result.migrated
        assert result.document["work"][0]["name"] == "Acme"

    def test_load_document_current(self):
        result = load_document(GROUPED_SKILLS_DOCUMENT)

        assert result.success
        assert not result.migrated

    def test_load_document_substitutes_empty_document(self):
        result = load_document("not a document")

        assert not result.success
        assert "Document root must be an object" in result.error
        assert result.document == empty_document()


@pytest.mark.unit
class TestSkillAndHighlightHelpers:
    """Tests for the normalization building blocks."""

    def test_flatten_skills_keeps_plain_strings(self):
        assert flatten_skills(["Go", {"name": "Web", "keywords": ["React"]}]) == ["Go", "React"]

    def test_flatten_skills_drops_nameless_empty_groups(self):
        assert flatten_skills([{"name": "", "keywords": []}, None]) == []

    def test_merge_highlights_returns_same_entry(self):
        entry = {"summary": "", "highlights": ["One"]}
        assert merge_highlights(entry, "summary") is entry
        assert entry == {"summary": "<ul><li>One</li></ul>"}

    def test_highlights_to_html_escapes(self):
        assert highlights_to_html(["a < b"], "R&D") == "<p>R&amp;D</p><ul><li>a &lt; b</li></ul>"

    def test_escape_html_leaves_quotes(self):
        assert escape_html('say "hi" & <go>') == 'say "hi" &amp; &lt;go&gt;'


@pytest.mark.unit
class TestProfiles:
    """Tests for profile synthesis from flat URLs."""

    @pytest.mark.parametrize(
        "host, network",
        [
            ("www.linkedin.com", "LinkedIn"),
            ("gist.github.com", "GitHub"),
            ("codeberg.org", "Codeberg"),
            ("localhost:8080", "Localhost"),
        ],
    )
    def test_infer_network(self, host, network):
        assert infer_network(host) == network

    def test_profile_from_url_without_scheme(self):
        assert profile_from_url("github.com/alexj/") == {
            "network": "GitHub",
            "username": "alexj",
            "url": "github.com/alexj/",
        }

    def test_profile_from_empty_url(self):
        assert profile_from_url("   ") is None

    def test_synthesize_skips_known_urls(self):
        existing = [{"network": "GitHub", "username": "alexj", "url": "https://github.com/alexj"}]
        profiles = synthesize_profiles(existing, {"github": "https://github.com/alexj", "linkedin": ""})

        assert profiles == existing
        assert profiles is not existing
