"""Quiz Enums - Tipos de questao, status de sessao e faixas de desempenho."""

from enum import Enum


class QuestionType(str, Enum):
    """Tipos de questao aceitos na geracao."""

    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    TRUE_FALSE = "true_false"
    FILL_IN_THE_BLANK = "fill_in_the_blank"

    @classmethod
    def normalize(cls, raw: str) -> "QuestionType":
        """Converte rotulos livres ("Multiple Choice") para o tipo canonico.

        Raises:
            ValueError: Se o rotulo nao corresponde a nenhum tipo
        """
        key = "_".join(str(raw).strip().lower().replace("-", " ").split())
        return cls(key)


class SessionStatus(str, Enum):
    """Status de uma sessao lancada. Transicao unica: active -> closed."""

    ACTIVE = "active"
    CLOSED = "closed"


class PerformanceTier(str, Enum):
    """Faixas de desempenho por aluno."""

    TOP = "top"  # >= 80%
    MIDDLE = "middle"  # 50-79%
    STRUGGLING = "struggling"  # < 50%
