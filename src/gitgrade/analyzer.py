"""Analysis engine and fetch-then-analyze orchestration.

`analyze` is a pure function of a RepoBundle and a captured "now";
`Analyzer` wires it to the GitHub fetcher for the app and CLI.
"""

import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional

from gitgrade.analysis.narrative import build_narrative
from gitgrade.analysis.scoring import (
    TEST_FILE_RATIO,
    composite_score,
    grade_from_score,
    score_dimensions,
)
from gitgrade.analysis.signals import extract_signals
from gitgrade.analysis.timeseries import build_commit_heatmap, build_weekly_histogram
from gitgrade.fetcher import GitHubFetcher
from gitgrade.models import AnalysisResult, RepoBundle

log = logging.getLogger(__name__)

TOP_EXTENSIONS = 8


def analyze(
    bundle: RepoBundle,
    now: Optional[datetime] = None,
    *,
    weekly_buckets: int = 8,
    heatmap_weeks: int = 20,
    test_file_ratio: float = TEST_FILE_RATIO,
) -> AnalysisResult:
    """Score a repository snapshot.

    Args:
        bundle: Fully fetched repository data.
        now: Reference time for staleness and the heatmap window. Captured
            once; defaults to the current UTC time. Naive values are UTC.
        weekly_buckets: Number of weekly histogram buckets.
        heatmap_weeks: Number of heatmap columns.
        test_file_ratio: Expected share of test files for a full tests score.
    """
    if not isinstance(bundle, RepoBundle):
        raise TypeError(f"analyze() expects a RepoBundle, got {type(bundle).__name__}")
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    signals = extract_signals(bundle, now)
    breakdown = score_dimensions(signals, test_file_ratio=test_file_ratio)
    overall = composite_score(breakdown)
    narrative = build_narrative(breakdown)

    top_extensions = sorted(signals.extension_counts.items(), key=lambda kv: -kv[1])
    log.debug("Signals for %s: %s", bundle.repo_meta.full_name or "<bundle>", signals)

    return AnalysisResult(
        repo=bundle.repo_meta.full_name,
        overall=overall,
        grade=grade_from_score(overall),
        breakdown=breakdown,
        file_count=signals.file_count,
        folder_count=signals.folder_count,
        primary_language=signals.primary_language,
        recent_commit_count=signals.sample_commit_count,
        top_extensions=tuple(top_extensions[:TOP_EXTENSIONS]),
        commit_buckets=build_weekly_histogram(bundle.commits, weekly_buckets),
        commit_heatmap=build_commit_heatmap(bundle.commits, now, heatmap_weeks),
        details=narrative.details,
        roadmap=narrative.roadmap,
        strengths=narrative.strengths,
        risks=narrative.risks,
        last_update=signals.last_update,
        tests_detected=signals.test_count,
        stars=signals.stars,
        forks=signals.forks,
        open_issues=signals.open_issues,
    )


class Analyzer:
    """Fetches a repository from GitHub and analyzes it."""

    def __init__(
        self,
        token: Optional[str] = None,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.token = token or os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN") or None
        self._on_status = on_status or (lambda _: None)
        self._fetcher = GitHubFetcher(token=self.token)

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def close(self) -> None:
        """Tear down resources."""
        await self._fetcher.close()

    async def inspect(
        self, owner: str, repo: str, now: Optional[datetime] = None
    ) -> AnalysisResult:
        """Fetch `owner/repo` and run the analysis."""
        bundle = await self._fetcher.fetch_bundle(owner, repo, on_status=self._status)
        self._status("Analyzing repository signals …")
        result = analyze(bundle, now)
        log.info("%s/%s scored %d (%s)", owner, repo, result.overall, result.grade.value)
        self._status("Done!")
        return result
