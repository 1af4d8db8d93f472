"""Quiz Repository - Acesso a dados de quizzes, sessoes e resultados."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from ..errors import PersistenceError
from ..models.enums import SessionStatus
from ..models.schemas import (
    GradedAnswer,
    LaunchedQuiz,
    LaunchedSession,
    LaunchedSessionSummary,
    Quiz,
    QuizQuestion,
    StudentResult,
)
from .database import Database

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Timestamp ISO-8601 em UTC."""
    return datetime.now(timezone.utc).isoformat()


def _load_answers(raw: Any) -> list[dict[str, Any]]:
    """Decodifica graded_answers salvo como TEXT (lista vazia se invalido)."""
    if isinstance(raw, list):
        return raw
    try:
        data = json.loads(raw or "[]")
    except (TypeError, json.JSONDecodeError):
        return []
    return data if isinstance(data, list) else []


class QuizRepository:
    """Persistencia de quizzes, sessoes lancadas e resultados de alunos.

    Acesso a dados puro, sem regra de negocio. Colunas JSON sao gravadas
    como TEXT e decodificadas na leitura.

    Tabelas:
        - quizzes: quiz gerado (imutavel)
        - launched_quizzes: sessao distribuida para uma turma
        - student_quiz_results: uma linha por correcao bem sucedida

    Example:
        >>> repo = QuizRepository(database)
        >>> quiz = await repo.get_quiz("abc-123")
    """

    def __init__(self, database: Database):
        self.db = database

    # =========================================================================
    # QUIZZES
    # =========================================================================

    async def insert_quiz(self, quiz_id: str, data: dict[str, Any]) -> Quiz:
        """Persiste um quiz validado e retorna a linha gravada."""
        await self.db.execute(
            """
            INSERT INTO quizzes (id, user_id, title, grade_level, subject, topic,
                number_of_questions, question_types, quiz_content, teaching_insights,
                custom_instructions, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                quiz_id,
                data["user_id"],
                data["title"],
                data["grade_level"],
                data["subject"],
                data["topic"],
                data["number_of_questions"],
                json.dumps(data["question_types"]),
                json.dumps(data["quiz_content"]),
                data["teaching_insights"],
                data.get("custom_instructions"),
                utc_now(),
            ),
        )
        logger.debug(f"[Quiz {quiz_id}] Quiz salvo")

        saved = await self.get_quiz(quiz_id)
        if saved is None:
            raise PersistenceError("Database did not return saved quiz.")
        return saved

    async def get_quiz(self, quiz_id: str) -> Quiz | None:
        row = await self.db.fetch_one(
            """
            SELECT id, user_id, title, grade_level, subject, topic, number_of_questions,
                   question_types, quiz_content, teaching_insights, custom_instructions,
                   created_at
            FROM quizzes
            WHERE id = ?
            """,
            (quiz_id,),
        )
        if row is None:
            return None

        row["question_types"] = json.loads(row["question_types"])
        row["quiz_content"] = json.loads(row["quiz_content"])
        return Quiz(**row)

    # =========================================================================
    # SESSOES
    # =========================================================================

    async def insert_session(
        self,
        *,
        session_id: str,
        quiz_id: str,
        user_id: str,
        class_name: str,
        notes: str | None,
        deployment_url: str,
        access_code: str,
    ) -> None:
        """Grava sessao ativa com agregados zerados e sem insights."""
        await self.db.execute(
            """
            INSERT INTO launched_quizzes (id, quiz_id, user_id, class_name, notes,
                deployment_url, access_code, status, students_completed, average_score,
                smart_insights, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, 0, 0, NULL, ?)
            """,
            (
                session_id,
                quiz_id,
                user_id,
                class_name,
                notes,
                deployment_url,
                access_code,
                SessionStatus.ACTIVE.value,
                utc_now(),
            ),
        )
        logger.debug(f"[Session {session_id}] Sessao salva (quiz={quiz_id})")

    async def get_session(self, session_id: str) -> LaunchedSession | None:
        row = await self.db.fetch_one(
            "SELECT * FROM launched_quizzes WHERE id = ?",
            (session_id,),
        )
        return LaunchedSession(**row) if row else None

    async def get_access_code(self, session_id: str) -> tuple[bool, str | None]:
        """Retorna (sessao_existe, codigo_armazenado)."""
        row = await self.db.fetch_one(
            "SELECT access_code FROM launched_quizzes WHERE id = ?",
            (session_id,),
        )
        if row is None:
            return False, None
        return True, row["access_code"]

    async def get_launched_quiz(self, session_id: str) -> LaunchedQuiz | None:
        """Sessao + conteudo do quiz, como o aluno recebe."""
        row = await self.db.fetch_one(
            """
            SELECT l.id, l.quiz_id, l.class_name, l.notes, l.status, l.created_at,
                   q.title, q.quiz_content
            FROM launched_quizzes l
            JOIN quizzes q ON l.quiz_id = q.id
            WHERE l.id = ?
            """,
            (session_id,),
        )
        if row is None:
            return None

        row["quiz_content"] = [QuizQuestion(**q) for q in json.loads(row["quiz_content"])]
        return LaunchedQuiz(**row)

    async def get_session_overview_row(self, session_id: str) -> dict[str, Any] | None:
        """Linha de resumo da sessao com titulo e total de questoes do quiz."""
        return await self.db.fetch_one(
            """
            SELECT l.id, l.quiz_id, l.class_name, l.created_at AS launch_date,
                   q.title, q.number_of_questions AS total_questions,
                   COALESCE(l.students_completed, 0) AS students_taken,
                   COALESCE(l.average_score, 0) AS average_score,
                   l.smart_insights, COALESCE(l.deployment_url, '') AS launch_url,
                   l.status, l.access_code
            FROM launched_quizzes l
            JOIN quizzes q ON l.quiz_id = q.id
            WHERE l.id = ?
            """,
            (session_id,),
        )

    async def list_sessions_for_user(self, user_id: str) -> list[LaunchedSessionSummary]:
        """Sessoes do professor, mais recentes primeiro."""
        rows = await self.db.fetch_all(
            """
            SELECT l.id, l.quiz_id, l.class_name, l.created_at AS launch_date,
                   q.title, l.status,
                   COALESCE(l.students_completed, 0) AS students_completed,
                   COALESCE(l.average_score, 0) AS average_score,
                   COALESCE(l.deployment_url, '') AS deployment_url
            FROM launched_quizzes l
            JOIN quizzes q ON l.quiz_id = q.id
            WHERE l.user_id = ?
            ORDER BY l.created_at DESC, l.rowid DESC
            """,
            (user_id,),
        )
        return [LaunchedSessionSummary(**row) for row in rows]

    async def update_status(
        self, session_id: str, status: SessionStatus, smart_insights: str | None
    ) -> int:
        return await self.db.execute(
            "UPDATE launched_quizzes SET status = ?, smart_insights = ? WHERE id = ?",
            (status.value, smart_insights, session_id),
        )

    # =========================================================================
    # RESULTADOS
    # =========================================================================

    async def insert_result(
        self,
        *,
        session_id: str,
        student_name: str,
        graded_answers: list[GradedAnswer],
        score_percentage: float,
    ) -> None:
        """Grava uma nova tentativa corrigida (nunca atualiza linhas existentes)."""
        payload = [answer.model_dump(by_alias=True) for answer in graded_answers]
        await self.db.execute(
            """
            INSERT INTO student_quiz_results (deployment_id, student_name, graded_answers,
                score_percentage, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (session_id, student_name, json.dumps(payload), score_percentage, utc_now()),
        )

    async def list_results(self, session_id: str) -> list[StudentResult]:
        """Resultados da sessao em ordem de chegada.

        Respostas armazenadas que nao decodificam viram lista vazia.
        """
        rows = await self.db.fetch_all(
            """
            SELECT id, deployment_id AS session_id, student_name, graded_answers,
                   score_percentage, created_at
            FROM student_quiz_results
            WHERE deployment_id = ?
            ORDER BY id
            """,
            (session_id,),
        )

        results = []
        for row in rows:
            answers = []
            for item in _load_answers(row["graded_answers"]):
                try:
                    answers.append(GradedAnswer.model_validate(item))
                except ValueError:
                    logger.warning(
                        f"[Session {session_id}] Resposta invalida ignorada "
                        f"(result={row['id']})"
                    )
            row["graded_answers"] = answers
            results.append(StudentResult(**row))
        return results

    async def recompute_stats(self, session_id: str) -> int:
        """Recalcula students_completed e average_score em um unico UPDATE."""
        return await self.db.execute(
            """
            UPDATE launched_quizzes
            SET
                students_completed = (
                    SELECT COUNT(*) FROM student_quiz_results WHERE deployment_id = ?
                ),
                average_score = (
                    SELECT CAST(COALESCE(ROUND(AVG(score_percentage)), 0) AS INTEGER)
                    FROM student_quiz_results
                    WHERE deployment_id = ?
                )
            WHERE id = ?
            """,
            (session_id, session_id, session_id),
        )
