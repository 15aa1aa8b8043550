"""Commit time series: weekly histogram and daily heatmap."""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from gitgrade.analysis.signals import commit_timestamps
from gitgrade.models import CommitHeatmap, CommitRecord, HeatmapCell, WeeklyHistogram

WEEK = timedelta(days=7)
DAY = timedelta(days=1)


def build_weekly_histogram(
    commits: Iterable[CommitRecord], buckets: int = 8
) -> WeeklyHistogram:
    """Count commits per 7-day bucket, ending at the latest commit.

    The final bucket starts exactly ``buckets - 1`` weeks after the first and
    contains the latest commit. Commits before the first bucket are dropped.
    """
    if buckets < 1:
        raise ValueError(f"buckets must be positive, got {buckets}")

    dates = sorted(commit_timestamps(commits))
    values = [0] * buckets
    if not dates:
        return WeeklyHistogram(
            labels=tuple(f"W{i + 1}" for i in range(buckets)),
            values=tuple(values),
        )

    start = dates[-1] - (buckets - 1) * WEEK
    for d in dates:
        idx = (d - start) // WEEK
        if 0 <= idx < buckets:
            values[idx] += 1

    labels = tuple(f"{start + i * WEEK:%d/%m}" for i in range(buckets))
    return WeeklyHistogram(labels=labels, values=tuple(values))


def heatmap_start(now: datetime, weeks: int) -> datetime:
    """First day of the grid: ``weeks*7 - 1`` days back, moved to a Sunday.

    A naive ``now`` is read as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    end = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    start = end - (weeks * 7 - 1) * DAY
    since_sunday = (start.weekday() + 1) % 7  # Monday=0 -> Sunday=0
    return start - since_sunday * DAY


def build_commit_heatmap(
    commits: Iterable[CommitRecord], now: datetime, weeks: int = 20
) -> CommitHeatmap:
    """Lay out per-day commit counts as a weeks × 7 grid starting on a Sunday."""
    if weeks < 1:
        raise ValueError(f"weeks must be positive, got {weeks}")

    per_day = Counter(ts.strftime("%Y-%m-%d") for ts in commit_timestamps(commits))
    start = heatmap_start(now, weeks)

    cells: list[HeatmapCell] = []
    max_count = 0
    for w in range(weeks):
        for d in range(7):
            key = (start + (w * 7 + d) * DAY).strftime("%Y-%m-%d")
            count = per_day.get(key, 0)
            max_count = max(max_count, count)
            cells.append(HeatmapCell(week=w, day=d, count=count, date=key))

    return CommitHeatmap(cells=tuple(cells), weeks=weeks, max_count=max_count)


def heat_intensity(count: int, max_count: int) -> float:
    """Normalized intensity in [0, 1]; 0 means no activity."""
    if max_count <= 0 or count <= 0:
        return 0.0
    return min(1.0, count / max_count)
