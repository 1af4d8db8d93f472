"""Stats Aggregator - Recalculo dos agregados de uma sessao."""

import logging

from ..storage import QuizRepository

logger = logging.getLogger(__name__)


class StatsAggregator:
    """Recalcula students_completed e average_score a partir dos resultados.

    Sempre um recalculo completo (COUNT/ROUND(AVG)) em um unico UPDATE,
    nunca incremento: rodar de novo sem novas submissoes da o mesmo valor,
    e recalculos concorrentes convergem para o conjunto de linhas atual.
    """

    def __init__(self, repository: QuizRepository):
        self.repository = repository

    async def recompute(self, session_id: str) -> None:
        updated = await self.repository.recompute_stats(session_id)
        if updated == 0:
            logger.warning(f"[Session {session_id}] Recalculo sem sessao correspondente")
        else:
            logger.debug(f"[Session {session_id}] Agregados recalculados")
