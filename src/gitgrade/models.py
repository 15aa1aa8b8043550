"""Data models for gitgrade."""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime, or None."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def coerce_count(value: Any) -> int:
    """Lenient non-negative integer: anything unusable reads as zero."""
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(number))


def _readonly(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class _Output(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ── Raw repository data ───────────────────────────────────────────────────

class RepoMeta(_Frozen):
    """Repository metadata."""

    full_name: str = ""
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    default_branch: str = "main"
    pushed_at: Optional[datetime] = None
    language: Optional[str] = None

    @field_validator("stars", "forks", "open_issues", mode="before")
    @classmethod
    def _lenient_count(cls, v: Any) -> int:
        return coerce_count(v)

    @field_validator("pushed_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)

    @field_validator("default_branch", mode="before")
    @classmethod
    def _branch_or_main(cls, v: Any) -> str:
        return v if isinstance(v, str) and v else "main"

    @field_validator("full_name", mode="before")
    @classmethod
    def _name_or_empty(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("language", mode="before")
    @classmethod
    def _language_or_none(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) and v else None

    @classmethod
    def from_github(cls, payload: Optional[dict]) -> "RepoMeta":
        """Build from a GitHub `/repos/{owner}/{repo}` response."""
        payload = payload or {}
        return cls(
            full_name=payload.get("full_name"),
            stars=payload.get("stargazers_count"),
            forks=payload.get("forks_count"),
            open_issues=payload.get("open_issues_count"),
            default_branch=payload.get("default_branch"),
            pushed_at=payload.get("pushed_at"),
            language=payload.get("language"),
        )


class CommitRecord(_Frozen):
    """A sampled commit. Dates are kept as the raw strings GitHub returned."""

    sha: str = ""
    message: str = ""
    author_date: Optional[str] = None
    committer_date: Optional[str] = None

    @field_validator("sha", "message", mode="before")
    @classmethod
    def _text_or_empty(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list, tuple)):
            return ""
        return str(v)

    @field_validator("author_date", "committer_date", mode="before")
    @classmethod
    def _date_text_or_none(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @property
    def timestamp(self) -> Optional[datetime]:
        """Author date, falling back to committer date; None if unusable."""
        return parse_timestamp(self.author_date or self.committer_date)

    @classmethod
    def from_github(cls, item: dict) -> "CommitRecord":
        detail = item.get("commit") or {}
        author = detail.get("author") or {}
        committer = detail.get("committer") or {}
        author_date = author.get("date")
        committer_date = committer.get("date")
        return cls(
            sha=str(item.get("sha") or ""),
            message=str(detail.get("message") or ""),
            author_date=author_date if isinstance(author_date, str) else None,
            committer_date=committer_date if isinstance(committer_date, str) else None,
        )


class TreeEntry(_Frozen):
    """One entry of the recursive git tree."""

    path: str = ""
    type: str = ""  # "blob", "tree"; anything else is ignored
    size: Optional[int] = None

    @field_validator("size", mode="before")
    @classmethod
    def _lenient_size(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        try:
            return int(float(v))
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("path", "type", mode="before")
    @classmethod
    def _str_or_empty(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""


class RepoBundle(_Frozen):
    """Everything one analysis consumes."""

    repo_meta: RepoMeta = Field(default_factory=RepoMeta)
    languages: Mapping[str, int] = Field(default_factory=dict, validate_default=True)
    commits: tuple[CommitRecord, ...] = ()
    readme: str = ""
    tree: tuple[TreeEntry, ...] = ()

    @field_validator("repo_meta", mode="before")
    @classmethod
    def _meta_or_default(cls, v: Any) -> Any:
        if isinstance(v, (RepoMeta, dict)):
            return v
        return RepoMeta()

    @field_validator("languages", mode="before")
    @classmethod
    def _lenient_languages(cls, v: Any) -> dict[str, int]:
        if not isinstance(v, Mapping):
            return {}
        return {str(name): coerce_count(size) for name, size in v.items()}

    @field_validator("languages", mode="after")
    @classmethod
    def _freeze_languages(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        return _readonly(v)

    @field_serializer("languages")
    def _dump_languages(self, v: Mapping[str, int]) -> dict[str, int]:
        return dict(v)

    @field_validator("readme", mode="before")
    @classmethod
    def _readme_text(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("commits", "tree", mode="before")
    @classmethod
    def _sequence_or_empty(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            return ()
        # Entries that are not objects are unusable and dropped.
        return tuple(item for item in v if isinstance(item, (dict, BaseModel)))


# ── Derived signals ───────────────────────────────────────────────────────

class StructureFlags(_Frozen):
    """Repository hygiene markers found in the tree."""

    has_src: bool = False
    has_docs: bool = False
    has_readme: bool = False
    has_gitignore: bool = False
    has_license: bool = False
    has_manifest: bool = False
    has_workflows: bool = False
    has_env_example: bool = False
    has_lint_config: bool = False

    @property
    def count(self) -> int:
        return sum(1 for v in self.model_dump().values() if v)


class Signals(_Frozen):
    """Primitive indicators derived from a RepoBundle."""

    file_count: int = 0
    folder_count: int = 0
    extension_counts: Mapping[str, int] = Field(default_factory=dict, validate_default=True)
    test_count: int = 0
    readme_length: int = 0
    readme_keyword_hits: int = 0
    flags: StructureFlags = Field(default_factory=StructureFlags)
    large_file_count: int = 0
    unique_commit_days: int = 0
    sample_commit_count: int = 0
    days_since_update: int = 0
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    primary_language: str = "Unknown"
    last_update: str = "Unknown"

    @field_validator("extension_counts", mode="after")
    @classmethod
    def _freeze_extensions(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        return _readonly(v)

    @field_serializer("extension_counts")
    def _dump_extensions(self, v: Mapping[str, int]) -> dict[str, int]:
        return dict(v)

    @property
    def popularity(self) -> int:
        return self.stars + self.forks


# ── Scores ────────────────────────────────────────────────────────────────

class Dimension(str, Enum):
    """Quality axis."""

    code_quality = "code_quality"
    structure = "structure"
    documentation = "documentation"
    tests = "tests"
    commits = "commits"
    relevance = "relevance"


class Grade(str, Enum):
    """Ordinal grade for the overall score."""

    gold = "Gold"
    silver = "Silver"
    bronze = "Bronze"
    needs_work = "Needs Work"


class Breakdown(_Output):
    """Per-dimension scores, each an integer in [0, 100]."""

    code_quality: int = Field(default=0, ge=0, le=100)
    structure: int = Field(default=0, ge=0, le=100)
    documentation: int = Field(default=0, ge=0, le=100)
    tests: int = Field(default=0, ge=0, le=100)
    commits: int = Field(default=0, ge=0, le=100)
    relevance: int = Field(default=0, ge=0, le=100)

    def __getitem__(self, dimension: Dimension) -> int:
        return getattr(self, Dimension(dimension).value)


# ── Commit time series ────────────────────────────────────────────────────

class WeeklyHistogram(_Output):
    """Fixed-width weekly commit counts."""

    labels: tuple[str, ...] = ()
    values: tuple[int, ...] = ()


class HeatmapCell(_Output):
    """One calendar day of the heatmap grid."""

    week: int  # column
    day: int  # row, 0=Sunday
    count: int = 0
    date: str


class CommitHeatmap(_Output):
    """Calendar-style daily commit grid."""

    cells: tuple[HeatmapCell, ...] = ()
    weeks: int = 0
    max_count: int = 0


# ── Result ────────────────────────────────────────────────────────────────

class Narrative(_Output):
    """Threshold-driven commentary on a breakdown."""

    strengths: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    details: tuple[str, ...] = ()
    roadmap: tuple[str, ...] = ()


class AnalysisResult(_Output):
    """Complete output of one analysis."""

    repo: str = ""
    overall: int = Field(default=0, ge=0, le=100)
    grade: Grade = Grade.needs_work
    breakdown: Breakdown = Field(default_factory=Breakdown)
    file_count: int = 0
    folder_count: int = 0
    primary_language: str = "Unknown"
    recent_commit_count: int = 0
    top_extensions: tuple[tuple[str, int], ...] = ()
    commit_buckets: WeeklyHistogram = Field(default_factory=WeeklyHistogram)
    commit_heatmap: CommitHeatmap = Field(default_factory=CommitHeatmap)
    details: tuple[str, ...] = ()
    roadmap: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    last_update: str = "Unknown"
    tests_detected: int = 0
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
