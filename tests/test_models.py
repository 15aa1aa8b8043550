"""Tests for the data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from gitgrade.models import (
    AnalysisResult,
    Breakdown,
    CommitRecord,
    Dimension,
    Grade,
    RepoBundle,
    RepoMeta,
    Signals,
    StructureFlags,
    TreeEntry,
    coerce_count,
    parse_timestamp,
)


class TestParseTimestamp:
    def test_zulu_suffix(self):
        ts = parse_timestamp("2025-01-15T10:00:00Z")
        assert ts == datetime(2025, 1, 15, 10, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        ts = parse_timestamp("2025-01-15T23:30:00-02:00")
        assert ts == datetime(2025, 1, 16, 1, 30, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        ts = parse_timestamp("2025-01-15T10:00:00")
        assert ts.tzinfo is not None

    @pytest.mark.parametrize("value", [None, "", "not-a-date", 12345, "2025-13-45"])
    def test_unusable_values(self, value):
        assert parse_timestamp(value) is None


class TestCoerceCount:
    @pytest.mark.parametrize(
        "value,expected",
        [(5, 5), ("12", 12), ("abc", 0), (None, 0), (-3, 0), (float("nan"), 0), (7.9, 7)],
    )
    def test_values(self, value, expected):
        assert coerce_count(value) == expected


class TestRepoMeta:
    def test_from_github(self):
        meta = RepoMeta.from_github(
            {
                "full_name": "owner/repo",
                "stargazers_count": 10,
                "forks_count": 3,
                "open_issues_count": 4,
                "default_branch": "develop",
                "pushed_at": "2025-01-15T10:00:00Z",
                "language": "Go",
            }
        )
        assert meta.stars == 10
        assert meta.forks == 3
        assert meta.open_issues == 4
        assert meta.default_branch == "develop"
        assert meta.pushed_at.year == 2025
        assert meta.language == "Go"

    def test_from_empty_payload(self):
        meta = RepoMeta.from_github(None)
        assert meta.stars == 0
        assert meta.default_branch == "main"
        assert meta.pushed_at is None
        assert meta.language is None

    def test_malformed_fields_degrade(self):
        meta = RepoMeta(stars="lots", forks=None, pushed_at="yesterday")
        assert meta.stars == 0
        assert meta.forks == 0
        assert meta.pushed_at is None

    def test_frozen(self):
        meta = RepoMeta(stars=1)
        with pytest.raises(ValidationError):
            meta.stars = 2


class TestCommitRecord:
    def test_author_date_preferred(self):
        c = CommitRecord(author_date="2025-01-01T00:00:00Z", committer_date="2025-02-01T00:00:00Z")
        assert c.timestamp.month == 1

    def test_committer_fallback(self):
        c = CommitRecord(committer_date="2025-02-01T00:00:00Z")
        assert c.timestamp.month == 2

    def test_no_dates(self):
        assert CommitRecord(sha="x").timestamp is None

    def test_non_string_fields_degrade(self):
        c = CommitRecord.model_validate(
            {"sha": 123, "message": None, "author_date": 1700000000, "committer_date": {"d": 1}}
        )
        assert c.sha == "123"
        assert c.message == ""
        assert c.author_date is None
        assert c.committer_date is None
        assert c.timestamp is None

    def test_from_github(self):
        c = CommitRecord.from_github(
            {
                "sha": "abc",
                "commit": {
                    "message": "fix",
                    "author": {"date": "2025-01-15T10:00:00Z"},
                    "committer": None,
                },
            }
        )
        assert c.sha == "abc"
        assert c.author_date == "2025-01-15T10:00:00Z"
        assert c.committer_date is None


class TestTreeEntry:
    def test_non_numeric_size(self):
        assert TreeEntry(path="a", type="blob", size="big").size is None

    def test_extra_github_fields_ignored(self):
        entry = TreeEntry.model_validate(
            {"path": "a.py", "mode": "100644", "type": "blob", "sha": "x", "size": 10, "url": "u"}
        )
        assert entry.size == 10


class TestRepoBundle:
    def test_defaults(self):
        b = RepoBundle()
        assert b.commits == ()
        assert b.tree == ()
        assert b.readme == ""

    def test_none_readme_and_lists(self):
        b = RepoBundle(readme=None, commits=None, tree=None, languages=None)
        assert b.readme == ""
        assert b.commits == ()
        assert b.languages == {}

    def test_languages_coerced(self):
        b = RepoBundle(languages={"Python": "100", "C": "x"})
        assert b.languages == {"Python": 100, "C": 0}

    def test_languages_read_only(self):
        source = {"Python": 100}
        b = RepoBundle(languages=source)
        with pytest.raises(TypeError):
            b.languages["Go"] = 1
        source["Go"] = 1
        assert "Go" not in b.languages
        with pytest.raises(TypeError):
            RepoBundle().languages["Go"] = 1

    def test_missing_meta_uses_defaults(self):
        b = RepoBundle(repo_meta=None)
        assert b.repo_meta == RepoMeta()

    def test_non_object_entries_dropped(self):
        b = RepoBundle.model_validate(
            {"commits": [None, 3, {"sha": "a"}], "tree": ["x", None, {"path": "a.py", "type": "blob"}]}
        )
        assert [c.sha for c in b.commits] == ["a"]
        assert [t.path for t in b.tree] == ["a.py"]


class TestSignals:
    def test_extension_counts_read_only(self):
        s = Signals(extension_counts={"py": 2})
        assert s.extension_counts == {"py": 2}
        with pytest.raises(TypeError):
            s.extension_counts["js"] = 1
        assert s.model_dump()["extension_counts"] == {"py": 2}


class TestStructureFlags:
    def test_count(self):
        assert StructureFlags().count == 0
        assert StructureFlags(has_src=True, has_docs=True).count == 2


class TestBreakdown:
    def test_getitem_by_dimension(self):
        b = Breakdown(code_quality=10, tests=40)
        assert b[Dimension.code_quality] == 10
        assert b[Dimension.tests] == 40

    def test_range_enforced(self):
        with pytest.raises(ValidationError):
            Breakdown(structure=101)

    def test_camel_case_serialization(self):
        dumped = Breakdown(code_quality=5).model_dump(by_alias=True)
        assert dumped["codeQuality"] == 5


class TestAnalysisResult:
    def test_grade_is_string_enum(self):
        result = AnalysisResult(grade=Grade.silver)
        assert result.grade == "Silver"
        assert result.model_dump(by_alias=True)["topExtensions"] == ()
