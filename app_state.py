"""Core module - shared resources owned by the running app."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from config import QuizConfig
from quiz.llm import ContentGateway
from quiz.service import QuizService
from quiz.storage import Database, QuizRepository

logger = logging.getLogger(__name__)


@dataclass
class AppResources:
    """Recursos compartilhados: conexao do banco, gateway e service.

    Criados no startup (lifespan) e fechados no shutdown. Ficam em
    ``app.state.resources``; nada e guardado em variaveis globais.
    """

    config: QuizConfig
    database: Database
    gateway: ContentGateway
    service: QuizService

    @classmethod
    def build(cls, config: QuizConfig, gateway: ContentGateway | None = None) -> AppResources:
        database = Database(config.database_path)
        gateway = gateway or ContentGateway(model=config.model, timeout=config.provider_timeout)
        service = QuizService(
            QuizRepository(database),
            gateway,
            base_url=config.frontend_url,
            grading_attempts=config.grading_attempts,
            qr_scale=config.qr_scale,
        )
        return cls(config=config, database=database, gateway=gateway, service=service)

    async def open(self) -> None:
        await self.database.connect()
        logger.info(
            f"Recursos prontos (db={self.config.database_path}, model={self.gateway.model})"
        )

    async def close(self) -> None:
        """Cleanup resources on shutdown."""
        await self.database.close()
