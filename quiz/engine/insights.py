"""Insights Generator - Resumo pedagogico do desempenho da turma."""

import logging
from collections import Counter

from ..errors import ProviderError, QuizError
from ..llm import ContentGateway
from ..models.performance import ClassPerformance, MissedQuestion
from ..models.schemas import StudentResult
from ..prompts import (
    INSIGHTS_ERROR_MESSAGE,
    INSIGHTS_UNAVAILABLE_MESSAGE,
    NO_RESPONSES_MESSAGE,
    NO_SESSION_DATA_MESSAGE,
    build_insights_prompt,
)
from ..storage import QuizRepository
from .scoring_engine import QuizScoringEngine

logger = logging.getLogger(__name__)


class InsightsGenerator:
    """Gera os smart insights de uma sessao no fechamento.

    Best-effort: qualquer falha do provider ou do banco vira uma mensagem fixa, nunca
    um erro, para nao bloquear o fechamento da sessao.

    Example:
        >>> insights = InsightsGenerator(gateway, repository)
        >>> text = await insights.summarize(session_id)
    """

    def __init__(
        self,
        gateway: ContentGateway,
        repository: QuizRepository,
        scoring: QuizScoringEngine | None = None,
    ):
        self.gateway = gateway
        self.repository = repository
        self.scoring = scoring or QuizScoringEngine()

    def analyze(self, results: list[StudentResult], average_score: int) -> ClassPerformance:
        """Consolida erros por questao e faixas por aluno."""
        performance = ClassPerformance(total_students=len(results), average_score=average_score)

        misses: Counter[str] = Counter()
        for result in results:
            for answer in result.graded_answers:
                if not answer.is_correct:
                    misses[answer.question] += 1

            percentage = self.scoring.score_percentage(result.graded_answers)
            performance.add_student(result.student_name, self.scoring.classify(percentage))

        # most_common: ordem decrescente, empates na ordem de primeira ocorrencia
        performance.most_missed = [
            MissedQuestion(question=question, times_missed=count)
            for question, count in misses.most_common()
        ]
        return performance

    async def summarize(self, session_id: str) -> str:
        try:
            results = await self.repository.list_results(session_id)
            if not results:
                return NO_RESPONSES_MESSAGE
            session = await self.repository.get_session(session_id)
        except QuizError:
            logger.exception(f"[Session {session_id}] Falha ao ler dados para insights")
            return INSIGHTS_ERROR_MESSAGE

        if session is None:
            return NO_SESSION_DATA_MESSAGE

        performance = self.analyze(results, session.average_score)
        logger.debug(f"[Session {session_id}] Desempenho: {performance.to_dict()}")

        try:
            text = await self.gateway.generate_text(build_insights_prompt(performance))
        except ProviderError as e:
            logger.error(f"[Session {session_id}] Falha ao gerar insights: {e}")
            return INSIGHTS_ERROR_MESSAGE

        if not text:
            logger.warning(f"[Session {session_id}] Provider retornou insights vazios")
            return INSIGHTS_UNAVAILABLE_MESSAGE
        return text
