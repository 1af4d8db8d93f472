"""Quiz Scoring Engine - Motor de pontuacao e faixas de desempenho."""

from ..models.enums import PerformanceTier
from ..models.schemas import GradedAnswer


class QuizScoringEngine:
    """Motor de pontuacao para submissoes corrigidas.

    Pontuacao: percentual de respostas corretas (corretas / total x 100).

    Faixas de desempenho:
        - >= 80%: top
        - 50-79%: middle
        - < 50%: struggling

    Example:
        >>> engine = QuizScoringEngine()
        >>> engine.classify(75.0)
        <PerformanceTier.MIDDLE: 'middle'>
    """

    # Faixas (threshold minimo, tier) em ordem decrescente
    TIER_THRESHOLDS = [
        (80, PerformanceTier.TOP),
        (50, PerformanceTier.MIDDLE),
        (0, PerformanceTier.STRUGGLING),
    ]

    def count_correct(self, graded_answers: list[GradedAnswer]) -> int:
        """Conta respostas com ``is_correct`` verdadeiro."""
        return sum(1 for answer in graded_answers if answer.is_correct is True)

    def score_percentage(self, graded_answers: list[GradedAnswer]) -> float:
        """Calcula o percentual de acerto.

        Args:
            graded_answers: Respostas corrigidas

        Returns:
            100 * corretas / total (0.0 se nao houver respostas)
        """
        if not graded_answers:
            return 0.0
        return self.count_correct(graded_answers) / len(graded_answers) * 100

    def classify(self, percentage: float) -> PerformanceTier:
        """Retorna a faixa de desempenho para um percentual."""
        for threshold, tier in self.TIER_THRESHOLDS:
            if percentage >= threshold:
                return tier

        # Percentual negativo nao ocorre; fallback para a faixa mais baixa
        return self.TIER_THRESHOLDS[-1][1]
