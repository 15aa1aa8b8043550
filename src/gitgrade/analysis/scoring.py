"""Dimension and composite scoring.

Each dimension is a weighted sum of normalized (0–1) signal ratios. The
table form keeps the weights inspectable; every row sums to 1.0.
"""

import math
from typing import Callable

from gitgrade.models import Breakdown, Dimension, Grade, Signals

# Reference share of files expected to be tests. Heuristic tuning, not a
# measured constant; exposed so callers can adjust it.
TEST_FILE_RATIO = 0.08

Term = tuple[float, Callable[[Signals], float]]

COMPOSITE_WEIGHTS: dict[Dimension, float] = {
    Dimension.code_quality: 0.25,
    Dimension.structure: 0.20,
    Dimension.documentation: 0.20,
    Dimension.tests: 0.15,
    Dimension.commits: 0.15,
    Dimension.relevance: 0.05,
}

GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (90, Grade.gold),
    (75, Grade.silver),
    (60, Grade.bronze),
)


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def ratio(value: float, reference: float) -> float:
    """``min(1, value / reference)``, floored at zero."""
    return clamp01(value / reference) if reference > 0 else 0.0


def recency(days: float, horizon: float) -> float:
    return clamp01(1 - min(1.0, days / horizon))


def score100(x01: float) -> int:
    return round_half_up(clamp01(x01) * 100)


def dimension_table(test_file_ratio: float = TEST_FILE_RATIO) -> dict[Dimension, tuple[Term, ...]]:
    """Weights and signal selectors for every dimension."""

    def test_reference(s: Signals) -> int:
        return max(1, round_half_up(s.file_count * test_file_ratio))

    return {
        Dimension.code_quality: (
            (0.28, lambda s: ratio(s.file_count, 140)),
            (0.22, lambda s: 1 - s.large_file_count / max(1, s.file_count)),
            (0.25, lambda s: ratio(len(s.extension_counts), 12)),
            (0.25, lambda s: ratio(s.flags.count, 9)),
        ),
        Dimension.structure: (
            (0.60, lambda s: ratio(s.flags.count, 9)),
            (0.25, lambda s: ratio(s.folder_count, 30)),
            (0.15, lambda s: float(s.flags.has_gitignore)),
        ),
        Dimension.documentation: (
            (0.55, lambda s: ratio(s.readme_length, 2600)),
            (0.35, lambda s: ratio(s.readme_keyword_hits, 10)),
            (0.10, lambda s: float(s.flags.has_license)),
        ),
        Dimension.tests: (
            (0.70, lambda s: ratio(s.test_count, test_reference(s))),
            (0.30, lambda s: float(s.flags.has_workflows)),
        ),
        Dimension.commits: (
            (0.55, lambda s: ratio(s.unique_commit_days, 18)),
            (0.30, lambda s: ratio(s.sample_commit_count, 80)),
            (0.15, lambda s: recency(s.days_since_update, 180)),
        ),
        Dimension.relevance: (
            (0.38, lambda s: ratio(s.popularity, 220)),
            (0.42, lambda s: recency(s.days_since_update, 365)),
            (0.20, lambda s: ratio(s.open_issues, 50)),
        ),
    }


def score_dimension(signals: Signals, terms: tuple[Term, ...]) -> int:
    return score100(sum(weight * clamp01(select(signals)) for weight, select in terms))


def score_dimensions(signals: Signals, *, test_file_ratio: float = TEST_FILE_RATIO) -> Breakdown:
    """Score all six dimensions independently."""
    table = dimension_table(test_file_ratio)
    return Breakdown(**{dim.value: score_dimension(signals, terms) for dim, terms in table.items()})


def composite_score(breakdown: Breakdown) -> int:
    """Weighted overall score in [0, 100]."""
    total = sum(weight * breakdown[dim] for dim, weight in COMPOSITE_WEIGHTS.items())
    return max(0, min(100, round_half_up(total)))


def grade_from_score(score: int) -> Grade:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.needs_work
