"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from gitgrade.models import CommitRecord, RepoBundle, RepoMeta, TreeEntry


def make_commit(date: str, sha: str = "abc123") -> CommitRecord:
    return CommitRecord(sha=sha, message="update", author_date=date)


@pytest.fixture
def now():
    """Fixed reference time: Wednesday 2025-03-05 15:00 UTC."""
    return datetime(2025, 3, 5, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def empty_bundle():
    return RepoBundle()


@pytest.fixture
def sample_bundle():
    """A small but healthy-looking Python project."""
    paths = [
        ("src", "tree", None),
        ("src/app", "tree", None),
        ("src/app/__init__.py", "blob", 10),
        ("src/app/main.py", "blob", 1200),
        ("src/app/models.py", "blob", 900),
        ("tests", "tree", None),
        ("tests/test_main.py", "blob", 800),
        ("docs", "tree", None),
        ("docs/index.md", "blob", 400),
        (".github", "tree", None),
        (".github/workflows", "tree", None),
        (".github/workflows/ci.yml", "blob", 300),
        ("README.md", "blob", 3000),
        ("LICENSE", "blob", 1000),
        (".gitignore", "blob", 50),
        ("pyproject.toml", "blob", 700),
        ("data.bin", "blob", 500_000),
    ]
    return RepoBundle(
        repo_meta=RepoMeta(
            full_name="octo/sample",
            stars=40,
            forks=10,
            open_issues=5,
            pushed_at="2025-03-01T10:00:00Z",
            language="Python",
        ),
        languages={"Python": 5000, "Shell": 200},
        commits=(
            make_commit("2025-03-01T10:00:00Z", "c1"),
            make_commit("2025-02-27T09:00:00Z", "c2"),
            make_commit("2025-02-27T18:00:00Z", "c3"),
            make_commit("2025-02-10T12:00:00Z", "c4"),
        ),
        readme="# Sample\n\n## Install\n\npip install sample\n\n## Usage\n\nRun it.\n",
        tree=tuple(TreeEntry(path=p, type=t, size=s) for p, t, s in paths),
    )
