"""Quiz Storage - Banco SQLite e repositorio de dados."""

from .database import Database
from .quiz_store import QuizRepository

__all__ = ["Database", "QuizRepository"]
