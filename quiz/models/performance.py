"""Class Performance - Snapshot agregado do desempenho de uma sessao."""

from dataclasses import dataclass, field
from typing import Any

from .enums import PerformanceTier

NO_MAJOR_STRUGGLE = "No major struggles identified"
MISSED_REASON = (
    "This question was commonly missed, indicating a need for further explanation or practice."
)


@dataclass
class MissedQuestion:
    """Questao errada por um ou mais alunos."""

    question: str
    times_missed: int
    reason: str = MISSED_REASON


@dataclass
class ClassPerformance:
    """Desempenho consolidado de todos os alunos de uma sessao.

    Attributes:
        total_students: Numero de submissoes consideradas
        average_score: Media da turma (valor agregado da sessao)
        most_missed: Questoes erradas, ordenadas por numero de erros (desc)
        tiers: Nomes dos alunos por faixa de desempenho
    """

    total_students: int = 0
    average_score: int = 0
    most_missed: list[MissedQuestion] = field(default_factory=list)
    tiers: dict[PerformanceTier, list[str]] = field(
        default_factory=lambda: {tier: [] for tier in PerformanceTier}
    )

    @property
    def top_struggle(self) -> str:
        """Questao mais errada, ou mensagem padrao se nao houver."""
        if self.most_missed:
            return self.most_missed[0].question
        return NO_MAJOR_STRUGGLE

    def add_student(self, name: str, tier: PerformanceTier) -> None:
        """Registra aluno na faixa correspondente."""
        self.tiers[tier].append(name)

    def students_in(self, tier: PerformanceTier) -> list[str]:
        return self.tiers.get(tier, [])

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario (log/debug)."""
        return {
            "total_students": self.total_students,
            "average_score": self.average_score,
            "top_struggle": self.top_struggle,
            "most_missed": [
                {"question": m.question, "times_missed": m.times_missed}
                for m in self.most_missed
            ],
            "tiers": {tier.value: list(names) for tier, names in self.tiers.items()},
        }
