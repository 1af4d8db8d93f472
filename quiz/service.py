"""Quiz Service - Casos de uso do ciclo de vida do quiz.

Compoe os engines sobre um repositorio e um gateway recebidos na
construcao. Uma instancia e criada no startup (``app_state``) e
compartilhada entre requests; nenhum estado de negocio fica em memoria.
"""

import logging

from .engine import (
    AccessVerifier,
    InsightsGenerator,
    LaunchManager,
    QuizGenerator,
    QuizScoringEngine,
    StatsAggregator,
    SubmissionGrader,
    encode_qr,
)
from .errors import AccessDeniedError, NotFoundError, ValidationError
from .llm import ContentGateway
from .models.enums import SessionStatus
from .models.schemas import (
    GenerateQuizRequest,
    GradedQuizResponse,
    LaunchedQuiz,
    LaunchedSessionSummary,
    LaunchRequest,
    LaunchResult,
    Quiz,
    SessionOverview,
    StatusUpdateResponse,
    StudentOverview,
    StudentSubmission,
)
from .storage import QuizRepository

logger = logging.getLogger(__name__)

__all__ = ["QuizService"]


class QuizService:
    """Fachada de casos de uso usada pelo router.

    Example:
        >>> service = QuizService(repository, gateway, base_url="http://localhost:3000")
        >>> quiz = await service.generate("teacher-1", request)
        >>> launch = await service.launch("teacher-1", quiz.id, LaunchRequest(class_name="7B"))
    """

    def __init__(
        self,
        repository: QuizRepository,
        gateway: ContentGateway,
        *,
        base_url: str,
        grading_attempts: int = 2,
        qr_scale: int = 5,
    ):
        self.repository = repository
        self.gateway = gateway
        self.qr_scale = qr_scale

        self.scoring = QuizScoringEngine()
        self.stats = StatsAggregator(repository)
        self.generator = QuizGenerator(gateway, repository)
        self.launcher = LaunchManager(repository, base_url=base_url, qr_scale=qr_scale)
        self.access = AccessVerifier(repository)
        self.grader = SubmissionGrader(
            gateway,
            repository,
            self.stats,
            scoring=self.scoring,
            max_attempts=grading_attempts,
        )
        self.insights = InsightsGenerator(gateway, repository, scoring=self.scoring)

    # =========================================================================
    # PROFESSOR
    # =========================================================================

    async def generate(self, teacher_id: str, request: GenerateQuizRequest) -> Quiz:
        return await self.generator.generate(teacher_id, request)

    async def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = await self.repository.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")
        return quiz

    async def launch(self, teacher_id: str, quiz_id: str, request: LaunchRequest) -> LaunchResult:
        return await self.launcher.launch(teacher_id, quiz_id, request.class_name, request.notes)

    async def list_launched(self, teacher_id: str) -> list[LaunchedSessionSummary]:
        return await self.repository.list_sessions_for_user(teacher_id)

    async def get_overview(self, session_id: str) -> SessionOverview:
        """Relatorio da sessao com uma linha por submissao."""
        row = await self.repository.get_session_overview_row(session_id)
        if row is None:
            raise NotFoundError("Quiz session not found")

        students = []
        for result in await self.repository.list_results(session_id):
            correct = self.scoring.count_correct(result.graded_answers)
            students.append(
                StudentOverview(
                    id=result.id,
                    name=result.student_name,
                    score=result.score_percentage,
                    correct=correct,
                    incorrect=len(result.graded_answers) - correct,
                )
            )

        launch_url = row["launch_url"]
        return SessionOverview(
            id=row["id"],
            title=row["title"],
            class_name=row["class_name"],
            launch_date=row["launch_date"],
            students_taken=row["students_taken"],
            average_score=row["average_score"],
            status=row["status"],
            launch_url=launch_url,
            qr_code_data=encode_qr(launch_url, scale=self.qr_scale) if launch_url else None,
            access_code=row["access_code"],
            total_questions=row["total_questions"],
            smart_insights=row["smart_insights"],
            students=students,
        )

    async def update_status(self, session_id: str, raw_status: str) -> StatusUpdateResponse:
        """Muda o status da sessao. Fechar gera e grava os smart insights.

        Transicao unica active -> closed:
            - closed em sessao ativa: gera insights e fecha
            - closed em sessao fechada: retorna os insights ja gravados
            - active em sessao ativa: nada muda
            - active em sessao fechada: rejeitado (sem reabertura)

        Raises:
            ValidationError: Status invalido ou tentativa de reabrir
            NotFoundError: Sessao inexistente
        """
        try:
            status = SessionStatus((raw_status or "").strip().lower())
        except ValueError:
            raise ValidationError("Invalid status value. Must be 'active' or 'closed'.") from None

        session = await self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Quiz session not found")

        if status == SessionStatus.ACTIVE:
            if session.status == SessionStatus.CLOSED:
                raise ValidationError("A closed quiz cannot be reopened")
            return StatusUpdateResponse(
                message="Quiz is already active",
                status=SessionStatus.ACTIVE,
                smart_insights=session.smart_insights,
            )

        if session.status == SessionStatus.CLOSED:
            return StatusUpdateResponse(
                message="Quiz is already closed",
                status=SessionStatus.CLOSED,
                smart_insights=session.smart_insights,
            )

        smart_insights = await self.insights.summarize(session_id)
        await self.repository.update_status(session_id, SessionStatus.CLOSED, smart_insights)
        logger.info(f"[Session {session_id}] Sessao fechada")

        return StatusUpdateResponse(
            message="Quiz closed successfully",
            status=SessionStatus.CLOSED,
            smart_insights=smart_insights,
        )

    # =========================================================================
    # ALUNO
    # =========================================================================

    async def get_launched_quiz(self, session_id: str) -> LaunchedQuiz:
        launched = await self.repository.get_launched_quiz(session_id)
        if launched is None:
            raise NotFoundError("Quiz not found")
        return launched

    async def verify_access(self, session_id: str, access_code: str) -> None:
        """Raises AccessDeniedError se o codigo nao conferir."""
        if not await self.access.verify(session_id, access_code):
            raise AccessDeniedError("Invalid access code")

    async def grade(self, submission: StudentSubmission) -> GradedQuizResponse:
        return await self.grader.grade(submission)
