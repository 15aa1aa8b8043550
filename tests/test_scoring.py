"""Tests for dimension and composite scoring."""

import math

import pytest

from gitgrade.analysis.scoring import (
    COMPOSITE_WEIGHTS,
    TEST_FILE_RATIO,
    composite_score,
    dimension_table,
    grade_from_score,
    ratio,
    round_half_up,
    score_dimensions,
)
from gitgrade.models import Breakdown, Dimension, Grade, Signals, StructureFlags

ALL_FLAGS = StructureFlags(**{name: True for name in StructureFlags.model_fields})


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(5.5) == 6
        assert round_half_up(4.5) == 5
        assert round_half_up(4.49) == 4

    def test_ratio_saturates(self):
        assert ratio(300, 140) == 1.0
        assert ratio(70, 140) == 0.5
        assert ratio(5, 0) == 0.0


class TestWeights:
    def test_each_dimension_sums_to_one(self):
        for dim, terms in dimension_table().items():
            assert math.isclose(sum(w for w, _ in terms), 1.0), dim

    def test_composite_sums_to_one(self):
        assert math.isclose(sum(COMPOSITE_WEIGHTS.values()), 1.0)

    def test_every_dimension_has_terms(self):
        assert set(dimension_table()) == set(Dimension)


class TestScoreDimensions:
    def test_empty_signals(self):
        b = score_dimensions(Signals(days_since_update=9999))
        # Only "no large files" contributes on an empty repo.
        assert b.code_quality == 22
        assert b.structure == 0
        assert b.documentation == 0
        assert b.tests == 0
        assert b.commits == 0
        assert b.relevance == 0

    def test_code_quality_full(self):
        s = Signals(
            file_count=140,
            extension_counts={f"e{i}": 1 for i in range(12)},
            flags=ALL_FLAGS,
        )
        assert score_dimensions(s).code_quality == 100

    def test_large_files_penalized(self):
        base = dict(file_count=140, extension_counts={f"e{i}": 1 for i in range(12)}, flags=ALL_FLAGS)
        clean = score_dimensions(Signals(**base)).code_quality
        heavy = score_dimensions(Signals(large_file_count=70, **base)).code_quality
        assert heavy == clean - 11

    def test_structure_full(self):
        s = Signals(flags=ALL_FLAGS, folder_count=30)
        assert score_dimensions(s).structure == 100

    def test_structure_gitignore_only(self):
        s = Signals(flags=StructureFlags(has_gitignore=True))
        # 0.60 * 1/9 + 0.15
        assert score_dimensions(s).structure == 22

    def test_documentation(self):
        s = Signals(readme_length=2600, flags=StructureFlags(has_license=True))
        assert score_dimensions(s).documentation == 65

    def test_documentation_full(self):
        s = Signals(readme_length=5000, readme_keyword_hits=10, flags=StructureFlags(has_license=True))
        assert score_dimensions(s).documentation == 100

    def test_tests_with_ci(self):
        s = Signals(file_count=100, test_count=8, flags=StructureFlags(has_workflows=True))
        assert score_dimensions(s).tests == 100

    def test_tests_without_ci(self):
        s = Signals(file_count=100, test_count=8)
        assert score_dimensions(s).tests == 70

    def test_tests_reference_minimum_one(self):
        s = Signals(file_count=3, test_count=1)
        assert score_dimensions(s).tests == 70

    def test_test_ratio_is_tunable(self):
        s = Signals(file_count=100, test_count=4)
        assert score_dimensions(s).tests == 35
        assert score_dimensions(s, test_file_ratio=0.04).tests == 70
        assert TEST_FILE_RATIO == 0.08

    def test_commits(self):
        full = Signals(unique_commit_days=18, sample_commit_count=80, days_since_update=0)
        stale = Signals(unique_commit_days=18, sample_commit_count=80, days_since_update=9999)
        assert score_dimensions(full).commits == 100
        assert score_dimensions(stale).commits == 85

    def test_relevance(self):
        s = Signals(stars=100, forks=10, days_since_update=0)
        assert score_dimensions(s).relevance == 61

    def test_saturation_caps_at_100(self):
        s = Signals(
            file_count=10_000,
            folder_count=10_000,
            extension_counts={f"e{i}": 1 for i in range(50)},
            flags=ALL_FLAGS,
            test_count=10_000,
            readme_length=100_000,
            readme_keyword_hits=10,
            unique_commit_days=1000,
            sample_commit_count=1000,
            stars=10**6,
            open_issues=10**6,
        )
        b = score_dimensions(s)
        for dim in Dimension:
            assert b[dim] == 100

    def test_order_independent(self, sample_bundle, now):
        from gitgrade.analysis.scoring import score_dimension
        from gitgrade.analysis.signals import extract_signals

        signals = extract_signals(sample_bundle, now)
        table = dimension_table()
        forward = {d: score_dimension(signals, t) for d, t in table.items()}
        backward = {d: score_dimension(signals, t) for d, t in reversed(list(table.items()))}
        assert forward == backward


class TestComposite:
    def test_all_hundred(self):
        b = Breakdown(**{d.value: 100 for d in Dimension})
        assert composite_score(b) == 100

    def test_all_zero(self):
        assert composite_score(Breakdown()) == 0

    def test_weighted(self):
        assert composite_score(Breakdown(code_quality=80)) == 20
        assert composite_score(Breakdown(relevance=100)) == 5

    def test_rounds_half_up(self):
        # 22 * 0.25 = 5.5
        assert composite_score(Breakdown(code_quality=22)) == 6


class TestGrade:
    @pytest.mark.parametrize(
        "score,grade",
        [
            (100, Grade.gold),
            (90, Grade.gold),
            (89, Grade.silver),
            (75, Grade.silver),
            (74, Grade.bronze),
            (60, Grade.bronze),
            (59, Grade.needs_work),
            (0, Grade.needs_work),
        ],
    )
    def test_boundaries(self, score, grade):
        assert grade_from_score(score) == grade

    def test_grade_values(self):
        assert grade_from_score(59) == "Needs Work"
        assert grade_from_score(90) == "Gold"
