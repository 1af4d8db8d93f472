"""Access Verifier - Checagem do codigo de acesso de uma sessao."""

import logging

from ..errors import InternalError, NotFoundError
from ..storage import QuizRepository

logger = logging.getLogger(__name__)


class AccessVerifier:
    def __init__(self, repository: QuizRepository):
        self.repository = repository

    async def verify(self, session_id: str, presented_code: str) -> bool:
        """Compara o codigo apresentado com o da sessao (strings aparadas).

        Returns:
            True se confere, False se nao confere

        Raises:
            NotFoundError: Sessao inexistente
            InternalError: Sessao sem codigo de acesso armazenado
        """
        exists, stored_code = await self.repository.get_access_code(session_id)
        if not exists:
            raise NotFoundError("Quiz not found")
        if stored_code is None or not str(stored_code).strip():
            logger.error(f"[Session {session_id}] Sessao sem codigo de acesso")
            raise InternalError("Session has no access code")

        matches = str(stored_code).strip() == str(presented_code or "").strip()
        if not matches:
            logger.info(f"[Session {session_id}] Codigo de acesso invalido")
        return matches
