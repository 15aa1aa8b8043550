"""Signal extraction: primitive indicators from a RepoBundle."""

import re
from collections.abc import Iterable
from datetime import datetime

from gitgrade.models import (
    CommitRecord,
    RepoBundle,
    Signals,
    StructureFlags,
)

NO_EXTENSION = "(no-ext)"
LARGE_FILE_BYTES = 300_000
STALE_DAYS = 9999  # used when the last push time is unknown

DOC_KEYWORDS = (
    "install",
    "setup",
    "usage",
    "features",
    "api",
    "demo",
    "license",
    "contributing",
    "run",
    "build",
)

_EXT_RE = re.compile(r"\.([a-z0-9]+)$")
_TEST_DIRS = frozenset({"test", "tests", "__tests__", "spec"})
_SCRIPT_EXTS = ("js", "jsx", "ts", "tsx", "mjs", "cjs")
_TEST_SUFFIXES = tuple(
    f".{kind}.{ext}" for kind in ("test", "spec") for ext in _SCRIPT_EXTS
)

_LICENSE_FILES = ("license", "license.md", "license.txt")
_README_FILES = ("readme", "readme.md")
_MANIFEST_FILES = ("package.json", "requirements.txt", "pyproject.toml")
_LINT_FILES = (
    ".eslintrc",
    ".eslintrc.json",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".prettierrc",
    ".prettierrc.json",
    ".prettierrc.js",
    "ruff.toml",
    ".ruff.toml",
    "pyproject.toml",
)
_ENV_EXAMPLES = (".env.example", ".env.sample")


def extension_of(path: str) -> str:
    """Lower-cased trailing extension, or ``(no-ext)``."""
    m = _EXT_RE.search(str(path or "").lower())
    return m.group(1) if m else NO_EXTENSION


def is_test_path(path: str) -> bool:
    """Heuristic: does this file path look like a test?"""
    p = str(path or "").lower()
    *dirs, name = p.split("/")
    if any(d in _TEST_DIRS for d in dirs):
        return True
    if name.endswith(_TEST_SUFFIXES):
        return True
    return name.endswith(".py") and (name.endswith("_test.py") or name.startswith("test_"))


def count_keyword_hits(text: str, keywords: Iterable[str] = DOC_KEYWORDS) -> int:
    """Number of keywords contained in `text` (case-insensitive)."""
    t = str(text or "").lower()
    return sum(1 for k in keywords if k in t)


def commit_timestamps(commits: Iterable[CommitRecord]) -> list[datetime]:
    """Usable commit timestamps, in input order."""
    return [ts for ts in (c.timestamp for c in commits) if ts is not None]


def detect_structure(paths: Iterable[str]) -> StructureFlags:
    """Existence-based hygiene flags over a set of tree paths."""
    lowered = [p.lower() for p in paths]
    path_set = set(lowered)

    def has(*names: str) -> bool:
        return any(n in path_set for n in names)

    def starts(prefix: str) -> bool:
        return any(p.startswith(prefix) for p in lowered)

    return StructureFlags(
        has_src=has("src") or starts("src/"),
        has_docs=has("docs") or starts("docs/"),
        has_readme=has(*_README_FILES),
        has_gitignore=has(".gitignore"),
        has_license=has(*_LICENSE_FILES),
        has_manifest=has(*_MANIFEST_FILES),
        has_workflows=starts(".github/workflows/"),
        has_env_example=any(e in p for p in lowered for e in _ENV_EXAMPLES),
        has_lint_config=has(*_LINT_FILES),
    )


def extract_signals(bundle: RepoBundle, now: datetime) -> Signals:
    """Derive all signals from `bundle`, measuring staleness against `now`."""
    files = [e for e in bundle.tree if e.type == "blob"]
    folders = [e for e in bundle.tree if e.type == "tree"]

    extension_counts: dict[str, int] = {}
    for f in files:
        ext = extension_of(f.path)
        extension_counts[ext] = extension_counts.get(ext, 0) + 1

    days = {ts.strftime("%Y-%m-%d") for ts in commit_timestamps(bundle.commits)}

    meta = bundle.repo_meta
    if meta.pushed_at is not None:
        elapsed = (now - meta.pushed_at).total_seconds() / 86400
        days_since_update = max(0, int(elapsed))
        last_update = meta.pushed_at.strftime("%Y-%m-%d")
    else:
        days_since_update = STALE_DAYS
        last_update = "Unknown"

    ranked = sorted(bundle.languages.items(), key=lambda kv: -kv[1])
    primary_language = ranked[0][0] if ranked else (meta.language or "Unknown")

    return Signals(
        file_count=len(files),
        folder_count=len(folders),
        extension_counts=extension_counts,
        test_count=sum(1 for f in files if is_test_path(f.path)),
        readme_length=len(bundle.readme.strip()),
        readme_keyword_hits=count_keyword_hits(bundle.readme),
        flags=detect_structure(e.path for e in bundle.tree),
        large_file_count=sum(1 for f in files if (f.size or 0) > LARGE_FILE_BYTES),
        unique_commit_days=len(days),
        sample_commit_count=len(bundle.commits),
        days_since_update=days_since_update,
        stars=meta.stars,
        forks=meta.forks,
        open_issues=meta.open_issues,
        primary_language=primary_language,
        last_update=last_update,
    )
