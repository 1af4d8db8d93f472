"""Submission Grader - Correcao de submissoes via provider com retry limitado."""

import logging

from ..errors import GradingError, NotFoundError, PersistenceError, ValidationError
from ..llm import ContentGateway
from ..models.schemas import GradedAnswer, GradedQuizResponse, StudentSubmission
from ..prompts import build_grading_prompt
from ..storage import QuizRepository
from .retry import retry_async
from .scoring_engine import QuizScoringEngine
from .stats import StatsAggregator
from .validation import validate_graded_payload

logger = logging.getLogger(__name__)

GRADING_FAILED_MESSAGE = "AI failed to grade after multiple attempts"


class SubmissionGrader:
    """Corrige a submissao de um aluno.

    Fluxo:
        1. Valida a submissao e confirma que a sessao existe
        2. Chama o provider ate ``max_attempts`` vezes; uma tentativa so e
           aceita se ``gradedAnswers`` passar na validacao de formato
        3. Grava o resultado (percentual = corretas / total x 100)
        4. Recalcula os agregados da sessao
        5. Retorna as respostas corrigidas

    Falhas nos passos 3 e 4 sao logadas e nao desfazem a correcao.

    Example:
        >>> grader = SubmissionGrader(gateway, repository, stats)
        >>> response = await grader.grade(submission)
    """

    def __init__(
        self,
        gateway: ContentGateway,
        repository: QuizRepository,
        stats: StatsAggregator,
        scoring: QuizScoringEngine | None = None,
        max_attempts: int = 2,
    ):
        self.gateway = gateway
        self.repository = repository
        self.stats = stats
        self.scoring = scoring or QuizScoringEngine()
        self.max_attempts = max(1, max_attempts)

    @staticmethod
    def _check_submission(submission: StudentSubmission) -> None:
        if not submission.student_name.strip():
            raise ValidationError("Student name is required")
        if not submission.session_id.strip():
            raise ValidationError("Session id is required")
        if not submission.answers:
            raise ValidationError("At least one answer is required")

    async def grade(self, submission: StudentSubmission) -> GradedQuizResponse:
        """Corrige, persiste e retorna as respostas corrigidas.

        Raises:
            ValidationError: Submissao incompleta
            NotFoundError: Sessao inexistente (antes de qualquer chamada ao provider)
            GradingError: Nenhuma tentativa produziu gradedAnswers validos
        """
        self._check_submission(submission)
        session_id = submission.session_id.strip()

        session = await self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Quiz session not found")

        prompt = build_grading_prompt(submission)
        expected = len(submission.answers)

        async def attempt() -> list[GradedAnswer]:
            payload = await self.gateway.generate_content(prompt)
            return validate_graded_payload(payload, expected_count=expected)

        def log_failure(number: int, error: Exception) -> None:
            logger.warning(
                f"[Session {session_id}] Tentativa de correcao {number}/{self.max_attempts} "
                f"falhou: {type(error).__name__}: {error}"
            )

        outcome = await retry_async(attempt, attempts=self.max_attempts, on_failure=log_failure)
        if not outcome.succeeded:
            logger.error(
                f"[Session {session_id}] Correcao falhou apos {self.max_attempts} tentativas "
                f"(aluno={submission.student_name!r})"
            )
            raise GradingError(GRADING_FAILED_MESSAGE) from outcome.last_error

        graded = outcome.value
        score = self.scoring.score_percentage(graded)
        await self._record(session_id, submission.student_name.strip(), graded, score)

        logger.info(
            f"[Session {session_id}] {submission.student_name.strip()!r} corrigido: "
            f"{self.scoring.count_correct(graded)}/{len(graded)} ({score:.0f}%)"
        )
        return GradedQuizResponse(graded_answers=graded)

    async def _record(
        self, session_id: str, student_name: str, graded: list[GradedAnswer], score: float
    ) -> None:
        try:
            await self.repository.insert_result(
                session_id=session_id,
                student_name=student_name,
                graded_answers=graded,
                score_percentage=score,
            )
        except PersistenceError:
            logger.exception(f"[Session {session_id}] Falha ao gravar resultado de {student_name!r}")
            return

        try:
            await self.stats.recompute(session_id)
        except PersistenceError:
            logger.exception(f"[Session {session_id}] Falha ao recalcular agregados")
