from types import SimpleNamespace

import pytest

from sme_assessment.scoring.engine import (
    BELOW_AVERAGE,
    MODERATE,
    NEEDS_IMPROVEMENT,
    STRONG,
    calculate_scores,
    effective_score,
    percentage,
    performance_band,
    theme_mean,
)


def q(id, theme_id, reverse=False):
    return {"id": id, "theme_id": theme_id, "reverse_scored": reverse}


def r(question_id, score):
    return {"question_id": question_id, "score": score}


def t(id, weight=1.0):
    return {"id": id, "weight": weight}


class TestThemeMean:
    def test_mean_of_scores(self):
        assert theme_mean([1, 2, 3, 4, 5]) == 3.0

    @pytest.mark.parametrize("scores", [[], None])
    def test_empty_is_none(self, scores):
        assert theme_mean(scores) is None

    def test_mean_stays_within_scale(self):
        mean = theme_mean([1, 5, 5, 2])
        assert 1 <= mean <= 5


class TestPercentage:
    @pytest.mark.parametrize(
        "mean,expected",
        [(1, 0.0), (3, 50.0), (5, 100.0), (4.5, 87.5)],
    )
    def test_linear_mapping(self, mean, expected):
        assert percentage(mean) == pytest.approx(expected)

    def test_none_passes_through(self):
        assert percentage(None) is None


class TestPerformanceBand:
    @pytest.mark.parametrize(
        "mean,band",
        [
            (1.0, NEEDS_IMPROVEMENT),
            (2.0, NEEDS_IMPROVEMENT),
            (2.01, BELOW_AVERAGE),
            (3.0, BELOW_AVERAGE),
            (3.5, MODERATE),
            (4.0, MODERATE),
            (4.01, STRONG),
            (5.0, STRONG),
        ],
    )
    def test_boundaries_are_inclusive_upper(self, mean, band):
        assert performance_band(mean) == band

    def test_none_has_no_band(self):
        assert performance_band(None) is None


class TestEffectiveScore:
    def test_reverse_scored_is_inverted(self):
        assert effective_score(1, True) == 5
        assert effective_score(2, True) == 4
        assert effective_score(3, True) == 3

    def test_plain_question_unchanged(self):
        assert effective_score(2, False) == 2

    @pytest.mark.parametrize("score", [1, 2, 3, 4, 5])
    def test_reversing_twice_is_identity(self, score):
        assert effective_score(effective_score(score, True), True) == score


class TestCalculateScores:
    def test_equal_weights(self):
        result = calculate_scores(
            [r(1, 3), r(2, 5)],
            [q(1, "a"), q(2, "b")],
            [t("a"), t("b")],
        )
        assert result.summary.composite_mean == 4.0
        assert result.summary.composite_percentage == 75.0
        assert result.summary.performance_band == MODERATE

    def test_weighted_composite(self):
        result = calculate_scores(
            [r(1, 3), r(2, 5)],
            [q(1, "a"), q(2, "b")],
            [t("a", 1.0), t("b", 2.0)],
        )
        assert result.summary.composite_mean == 4.33
        assert result.summary.composite_percentage == 83.33
        assert result.summary.performance_band == STRONG

    def test_band_uses_unrounded_composite(self):
        # 4.004 rounds to 4.0 for display but is still above the moderate ceiling
        result = calculate_scores(
            [r(1, 4.004)],
            [q(1, "a")],
            [t("a")],
        )
        assert result.summary.composite_mean == 4.0
        assert result.summary.performance_band == STRONG

    def test_reverse_scored_question(self):
        result = calculate_scores(
            [r(1, 5), r(2, 1)],
            [q(1, "a"), q(2, "a", reverse=True)],
            [t("a")],
        )
        assert result.theme_scores[0].mean_score == 5.0
        assert result.theme_scores[0].percentage == 100.0

    def test_all_ones(self):
        result = calculate_scores(
            [r(1, 1), r(2, 1), r(3, 1)],
            [q(1, "a"), q(2, "a"), q(3, "b")],
            [t("a"), t("b")],
        )
        assert result.summary.composite_mean == 1.0
        assert result.summary.composite_percentage == 0.0
        assert result.summary.performance_band == NEEDS_IMPROVEMENT

    def test_unknown_question_has_no_effect(self):
        questions = [q(1, "a")]
        themes = [t("a")]
        base = calculate_scores([r(1, 4)], questions, themes)
        with_unknown = calculate_scores([r(1, 4), r(99, 1)], questions, themes)
        assert with_unknown == base

    def test_unanswered_theme_is_absent(self):
        result = calculate_scores(
            [r(1, 4)],
            [q(1, "a"), q(2, "b")],
            [t("a"), t("b", 3.0)],
        )
        assert [ts.theme_id for ts in result.theme_scores] == ["a"]
        assert result.summary.composite_mean == 4.0

    def test_missing_or_zero_weight_defaults_to_one(self):
        result = calculate_scores(
            [r(1, 2), r(2, 4)],
            [q(1, "a"), q(2, "orphan")],
            [t("a", 0)],
        )
        assert result.summary.composite_mean == 3.0

    def test_theme_scores_are_rounded(self):
        result = calculate_scores(
            [r(1, 1), r(2, 2), r(3, 2)],
            [q(1, "a"), q(2, "a"), q(3, "a")],
            [t("a")],
        )
        assert result.theme_scores[0].mean_score == 1.67
        assert result.theme_scores[0].percentage == 16.67

    def test_no_valid_responses(self):
        result = calculate_scores([r(42, 3)], [q(1, "a")], [t("a")])
        assert result.theme_scores == []
        assert result.summary.composite_mean is None
        assert result.summary.composite_percentage is None
        assert result.summary.performance_band is None

    def test_empty_inputs(self):
        result = calculate_scores([], [], [])
        assert result.to_dict() == {
            "theme_scores": [],
            "summary": {"composite_mean": None, "composite_percentage": None, "performance_band": None},
        }

    def test_non_numeric_scores_are_skipped(self):
        result = calculate_scores(
            [r(1, "n/a"), r(2, None), r(3, True), r(4, 4)],
            [q(1, "a"), q(2, "a"), q(3, "a"), q(4, "a")],
            [t("a")],
        )
        assert result.theme_scores[0].mean_score == 4.0

    @pytest.mark.parametrize("bad", ["nan", "inf", "-inf", float("nan"), float("inf")])
    def test_non_finite_scores_are_skipped(self, bad):
        result = calculate_scores(
            [r(1, bad), r(2, 4)],
            [q(1, "a"), q(2, "a")],
            [t("a")],
        )
        assert result.theme_scores[0].mean_score == 4.0
        assert result.theme_scores[0].percentage == 75.0
        assert result.summary.performance_band == MODERATE

    def test_non_finite_weight_defaults_to_one(self):
        result = calculate_scores(
            [r(1, 2), r(2, 4)],
            [q(1, "a"), q(2, "b")],
            [t("a", float("nan")), t("b", float("inf"))],
        )
        assert result.summary.composite_mean == 3.0

    def test_unhashable_ids_are_skipped(self):
        result = calculate_scores(
            [r([1], 3), r({"id": 2}, 1), r(1, 5), r(3, 2)],
            [q(1, "a"), q([9], "a"), q(3, ["not", "hashable"])],
            [t("a"), t({"x": 1}, 2.0)],
        )
        assert [ts.theme_id for ts in result.theme_scores] == ["a"]
        assert result.theme_scores[0].mean_score == 5.0
        assert result.summary.composite_mean == 5.0

    def test_accepts_attribute_objects(self):
        responses = [SimpleNamespace(question_id=1, score=2), SimpleNamespace(question_id=2, score=5)]
        questions = [
            SimpleNamespace(id=1, theme_id=7, reverse_scored=True),
            SimpleNamespace(id=2, theme_id=7, reverse_scored=False),
        ]
        themes = [SimpleNamespace(id=7, weight=1.5)]
        result = calculate_scores(responses, questions, themes)
        assert result.theme_scores[0].theme_id == 7
        assert result.theme_scores[0].mean_score == 4.5
        assert result.summary.performance_band == STRONG

    def test_idempotent(self):
        args = ([r(1, 3), r(2, 4), r(3, 2)], [q(1, "a"), q(2, "a"), q(3, "b", True)], [t("a"), t("b", 2)])
        assert calculate_scores(*args) == calculate_scores(*args)

    def test_to_dict_shape(self):
        result = calculate_scores([r(1, 5)], [q(1, "a")], [t("a")])
        assert result.to_dict() == {
            "theme_scores": [{"theme_id": "a", "mean_score": 5.0, "percentage": 100.0}],
            "summary": {"composite_mean": 5.0, "composite_percentage": 100.0, "performance_band": STRONG},
        }
