# =============================================================================
# TESTES - Scoring Engine
# =============================================================================
# Testes unitarios para pontuacao e faixas de desempenho
# =============================================================================

import pytest


def _answers(verdicts):
    from quiz.models import GradedAnswer

    return [
        GradedAnswer(
            question=f"Q{i}",
            student_answer="a",
            correct_answer="b",
            is_correct=verdict,
            explanation="e",
        )
        for i, verdict in enumerate(verdicts)
    ]


class TestScorePercentage:
    """Testes para score_percentage."""

    @pytest.fixture
    def engine(self):
        from quiz.engine.scoring_engine import QuizScoringEngine

        return QuizScoringEngine()

    def test_three_of_four_is_75(self, engine):
        assert engine.score_percentage(_answers([True, True, True, False])) == 75

    def test_all_correct(self, engine):
        assert engine.score_percentage(_answers([True, True])) == 100

    def test_none_correct(self, engine):
        assert engine.score_percentage(_answers([False, False, False])) == 0

    def test_empty_answers_scores_zero(self, engine):
        assert engine.score_percentage([]) == 0

    def test_one_of_three(self, engine):
        assert engine.score_percentage(_answers([True, False, False])) == pytest.approx(33.333, 0.01)

    def test_count_correct(self, engine):
        assert engine.count_correct(_answers([True, False, True])) == 2


class TestClassify:
    """Testes para as faixas de desempenho."""

    @pytest.mark.parametrize(
        "percentage,tier",
        [
            (100, "top"),
            (80, "top"),
            (79.9, "middle"),
            (50, "middle"),
            (49.9, "struggling"),
            (0, "struggling"),
        ],
    )
    def test_tier_boundaries(self, percentage, tier):
        from quiz.engine.scoring_engine import QuizScoringEngine

        assert QuizScoringEngine().classify(percentage).value == tier

    def test_thresholds_are_descending(self):
        from quiz.engine.scoring_engine import QuizScoringEngine

        thresholds = [t for t, _ in QuizScoringEngine.TIER_THRESHOLDS]

        assert thresholds == sorted(thresholds, reverse=True)
