"""Database - Execucao assincrona de SQL parametrizado sobre SQLite."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Sequence

from ..errors import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS quizzes (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    grade_level TEXT NOT NULL,
    subject TEXT NOT NULL,
    topic TEXT NOT NULL,
    number_of_questions INTEGER NOT NULL,
    question_types TEXT NOT NULL,
    quiz_content TEXT NOT NULL,
    teaching_insights TEXT NOT NULL,
    custom_instructions TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS launched_quizzes (
    id TEXT PRIMARY KEY,
    quiz_id TEXT NOT NULL REFERENCES quizzes(id),
    user_id TEXT NOT NULL,
    class_name TEXT NOT NULL,
    notes TEXT,
    deployment_url TEXT NOT NULL,
    access_code TEXT,
    status TEXT NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'closed')),
    students_completed INTEGER NOT NULL DEFAULT 0,
    average_score INTEGER NOT NULL DEFAULT 0,
    smart_insights TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS student_quiz_results (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    deployment_id TEXT NOT NULL REFERENCES launched_quizzes(id) ON DELETE CASCADE,
    student_name TEXT NOT NULL,
    graded_answers TEXT NOT NULL,
    score_percentage REAL NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_results_deployment ON student_quiz_results(deployment_id);
CREATE INDEX IF NOT EXISTS idx_launched_user ON launched_quizzes(user_id);
"""


class Database:
    """Conexao SQLite compartilhada com execucao fora do event loop.

    Uma unica conexao e aberta no startup; cada statement roda em
    ``asyncio.to_thread`` sob um lock, entao writes concorrentes sao
    serializados pelo proprio banco e nenhum request bloqueia o loop.

    Example:
        >>> db = Database("data/quizzes.db")
        >>> await db.connect()
        >>> rows = await db.fetch_all("SELECT * FROM quizzes WHERE user_id = ?", ("u1",))
        >>> await db.close()
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def _open(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        conn.executescript(SCHEMA)
        return conn

    async def connect(self) -> None:
        """Abre a conexao e garante o schema."""
        if self._conn is not None:
            return
        try:
            self._conn = await asyncio.to_thread(self._open)
        except sqlite3.Error as e:
            logger.exception(f"Falha ao abrir banco: {self.path}")
            raise PersistenceError(f"Could not open database {self.path}: {e}") from e
        logger.info(f"Banco conectado: {self.path}")

    async def close(self) -> None:
        """Fecha a conexao (idempotente)."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await asyncio.to_thread(conn.close)
        logger.info("Banco desconectado")

    def _run(self, sql: str, params: Sequence[Any], fetch: bool) -> list[dict[str, Any]] | int:
        if self._conn is None:
            raise PersistenceError("Database is not connected")
        with self._lock:
            cursor = self._conn.execute(sql, tuple(params))
            if fetch:
                return [dict(row) for row in cursor.fetchall()]
            return cursor.rowcount

    async def _execute(self, sql: str, params: Sequence[Any], fetch: bool):
        try:
            return await asyncio.to_thread(self._run, sql, params, fetch)
        except PersistenceError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Erro SQL: {e} | sql={' '.join(sql.split())[:120]}")
            raise PersistenceError(f"Database error: {e}") from e

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Executa query e retorna todas as linhas como dicts."""
        return await self._execute(sql, params, fetch=True)

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        """Executa query e retorna a primeira linha (ou None)."""
        rows = await self._execute(sql, params, fetch=True)
        return rows[0] if rows else None

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Executa statement de escrita e retorna o numero de linhas afetadas."""
        return await self._execute(sql, params, fetch=False)
