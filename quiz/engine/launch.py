"""Launch Manager - Distribuicao de quizzes para turmas."""

import logging
import secrets
import uuid

import segno

from ..errors import InternalError, NotFoundError, ValidationError
from ..models.schemas import LaunchResult
from ..storage import QuizRepository

logger = logging.getLogger(__name__)

ACCESS_CODE_MIN = 100000
ACCESS_CODE_MAX = 999999


def generate_access_code() -> str:
    """Codigo numerico de 6 digitos, uniforme em [100000, 999999]."""
    return str(ACCESS_CODE_MIN + secrets.randbelow(ACCESS_CODE_MAX - ACCESS_CODE_MIN + 1))


def build_distribution_url(base_url: str, session_id: str) -> str:
    return f"{base_url.rstrip('/')}/quiz/{session_id}"


def encode_qr(url: str, scale: int = 5) -> str:
    """Codifica a URL como QR code PNG (data URI base64).

    Raises:
        InternalError: Se a URL nao puder ser codificada
    """
    try:
        return segno.make(url, error="m").png_data_uri(scale=scale)
    except (ValueError, segno.DataOverflowError) as e:
        logger.error(f"Falha ao gerar QR code para {url!r}: {e}")
        raise InternalError("Failed to generate QR code.") from e


class LaunchManager:
    """Cria sessoes distribuiveis para quizzes existentes.

    Cada lancamento gera id de sessao (uuid4), codigo de acesso, link
    publico e QR code do link. O QR e gerado antes de gravar a sessao:
    falha na codificacao aborta o lancamento sem deixar linha orfa.

    Example:
        >>> manager = LaunchManager(repository, base_url="https://app.example.com")
        >>> result = await manager.launch("teacher-1", quiz_id, "Turma 7B")
    """

    def __init__(self, repository: QuizRepository, base_url: str, qr_scale: int = 5):
        self.repository = repository
        self.base_url = base_url
        self.qr_scale = qr_scale

    async def launch(
        self,
        teacher_id: str,
        quiz_id: str,
        class_name: str,
        notes: str | None = None,
    ) -> LaunchResult:
        """Lanca o quiz para uma turma.

        Raises:
            ValidationError: Nome da turma vazio
            NotFoundError: Quiz inexistente
            InternalError: Falha na geracao do QR code
            PersistenceError: Falha ao gravar a sessao
        """
        if not class_name or not class_name.strip():
            raise ValidationError("Class name is required")

        quiz = await self.repository.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")

        session_id = str(uuid.uuid4())
        access_code = generate_access_code()
        distribution_url = build_distribution_url(self.base_url, session_id)
        qr_image = encode_qr(distribution_url, scale=self.qr_scale)

        await self.repository.insert_session(
            session_id=session_id,
            quiz_id=quiz_id,
            user_id=teacher_id,
            class_name=class_name.strip(),
            notes=notes,
            deployment_url=distribution_url,
            access_code=access_code,
        )
        logger.info(f"[Session {session_id}] Quiz {quiz_id} lancado para {class_name.strip()!r}")

        return LaunchResult(
            session_id=session_id,
            distribution_url=distribution_url,
            qr_image=qr_image,
            access_code=access_code,
        )
