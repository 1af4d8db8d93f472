"""Quiz Router - Endpoints FastAPI do ciclo de vida do quiz."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from .errors import InternalError
from .models.schemas import (
    GenerateQuizRequest,
    LaunchRequest,
    StatusUpdateRequest,
    StudentSubmission,
)
from .service import QuizService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes", tags=["Quiz"])

USER_ID_HEADER = "X-User-Id"


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_quiz_service(request: Request) -> QuizService:
    """Dependency para obter o QuizService criado no startup."""
    return request.app.state.resources.service


def get_current_user_id(request: Request) -> str:
    """Id do professor autenticado.

    Lido do usuario anexado pelo middleware de auth (``request.state.user``).
    O header ``X-User-Id`` so e aceito com ``trust_user_header`` ligado
    (desenvolvimento ou atras de proxy que ja autenticou). Ausencia e falha
    interna: a rota so e alcancavel depois da autenticacao.
    """
    user = getattr(request.state, "user", None)
    if isinstance(user, dict) and user.get("sub"):
        return str(user["sub"])

    header = request.headers.get(USER_ID_HEADER, "").strip()
    if header:
        if request.app.state.resources.config.trust_user_header:
            return header
        logger.warning(f"Header {USER_ID_HEADER} ignorado (trust_user_header desligado)")

    logger.error(f"Identidade ausente em {request.method} {request.url.path}")
    raise InternalError("User ID not found in request context")


# =============================================================================
# PROFESSOR
# =============================================================================


@router.post("")
async def generate_quiz(
    body: GenerateQuizRequest,
    user_id: str = Depends(get_current_user_id),
    service: QuizService = Depends(get_quiz_service),
):
    """Gera um quiz com o provider e persiste."""
    quiz = await service.generate(user_id, body)
    return {"quiz": quiz.model_dump(mode="json")}


@router.get("/launched")
async def list_launched_quizzes(
    user_id: str = Depends(get_current_user_id),
    service: QuizService = Depends(get_quiz_service),
):
    """Sessoes lancadas pelo professor, mais recentes primeiro."""
    sessions = await service.list_launched(user_id)
    return [session.model_dump(mode="json") for session in sessions]


@router.get("/launched/{launch_id}/overview")
async def get_launched_quiz_overview(
    launch_id: str,
    service: QuizService = Depends(get_quiz_service),
):
    """Relatorio agregado da sessao."""
    overview = await service.get_overview(launch_id)
    return {"quiz": overview.model_dump(mode="json", by_alias=True)}


@router.get("/launched/{launch_id}")
async def get_launched_quiz(
    launch_id: str,
    service: QuizService = Depends(get_quiz_service),
):
    """Sessao + quiz como o aluno recebe."""
    launched = await service.get_launched_quiz(launch_id)
    return {
        "message": "Quiz fetched successfully",
        "quiz": launched.model_dump(mode="json"),
    }


@router.get("/verify-access/{launch_id}/{access_code}")
async def verify_access(
    launch_id: str,
    access_code: str,
    service: QuizService = Depends(get_quiz_service),
):
    """Confere o codigo de acesso (401 se nao conferir)."""
    await service.verify_access(launch_id, access_code)
    return {"message": "Access granted"}


# =============================================================================
# ALUNO
# =============================================================================


@router.post("/grade")
async def grade_quiz(
    body: StudentSubmission,
    service: QuizService = Depends(get_quiz_service),
):
    """Corrige uma submissao (com retry limitado no provider)."""
    graded = await service.grade(body)
    return graded.model_dump(mode="json", by_alias=True)


# =============================================================================
# QUIZ / SESSAO POR ID
# =============================================================================


@router.get("/{quiz_id}")
async def get_quiz(
    quiz_id: str,
    service: QuizService = Depends(get_quiz_service),
):
    quiz = await service.get_quiz(quiz_id)
    return {"quiz": quiz.model_dump(mode="json")}


@router.post("/{quiz_id}/launch")
async def launch_quiz(
    quiz_id: str,
    body: LaunchRequest,
    user_id: str = Depends(get_current_user_id),
    service: QuizService = Depends(get_quiz_service),
):
    """Lanca o quiz para uma turma (link, codigo e QR code)."""
    result = await service.launch(user_id, quiz_id, body)
    return result.model_dump(by_alias=True)


@router.post("/{launch_id}/status")
async def update_quiz_status(
    launch_id: str,
    body: StatusUpdateRequest,
    service: QuizService = Depends(get_quiz_service),
):
    """Fecha a sessao (gera smart insights) ou mantem ativa."""
    result = await service.update_status(launch_id, body.status)
    return result.model_dump(mode="json", by_alias=True)
