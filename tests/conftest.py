# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Banco SQLite real em tmp_path, provider substituido por um gateway fake
# =============================================================================

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture
def clean_env():
    """Limpa variáveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


# =============================================================================
# FIXTURES DE STORAGE
# =============================================================================


@pytest_asyncio.fixture
async def database(temp_db_path):
    """Banco SQLite conectado com o schema criado."""
    from quiz.storage import Database

    db = Database(temp_db_path)
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
def repository(database):
    from quiz.storage import QuizRepository

    return QuizRepository(database)


# =============================================================================
# FIXTURES DO PROVIDER
# =============================================================================


@pytest.fixture
def fake_gateway():
    """Gateway fake: respostas controladas por cada teste."""
    gateway = MagicMock()
    gateway.model = "haiku"
    gateway.generate_content = AsyncMock()
    gateway.generate_text = AsyncMock(return_value="## Quick Overview\nClass did well.")
    return gateway


# =============================================================================
# FIXTURES DE DADOS
# =============================================================================


def _question(index: int, question_type: str, hint: bool) -> dict:
    question = {
        "question": f"Question {index}?",
        "type": question_type,
        "correct_answer": f"Answer {index}",
        "explanation": f"Because {index}.",
    }
    if question_type == "multiple_choice":
        question["options"] = [f"A. {index}", f"B. {index}", f"C. {index}", f"D. {index}"]
        question["correct_answer"] = f"A. {index}"
    elif question_type == "true_false":
        question["correct_answer"] = "true"
    if hint:
        question["hint"] = f"Hint {index}"
    return question


@pytest.fixture
def quiz_payload_factory():
    """Monta payloads de quiz no formato devolvido pelo provider."""

    def factory(count: int = 5, types: tuple = ("multiple_choice",), hints: bool = False) -> dict:
        return {
            "quiz_content": [
                _question(i + 1, types[i % len(types)], hints) for i in range(count)
            ],
            "teaching_insights": "Focus on the core vocabulary.",
        }

    return factory


@pytest.fixture
def quiz_request():
    """Pedido de geracao valido (5 questoes multiple_choice)."""
    from quiz.models import GenerateQuizRequest

    return GenerateQuizRequest(
        subject="Science",
        topic="Photosynthesis",
        grade_level="7",
        number_of_questions=5,
        question_types=["multiple_choice"],
    )


@pytest.fixture
def graded_payload_factory():
    """Monta respostas de correcao a partir de uma lista de acertos."""

    def factory(verdicts: list) -> dict:
        return {
            "gradedAnswers": [
                {
                    "question": f"Question {i + 1}?",
                    "studentAnswer": f"Student {i + 1}",
                    "correctAnswer": f"Answer {i + 1}",
                    "isCorrect": verdict,
                    "explanation": "Reviewed.",
                }
                for i, verdict in enumerate(verdicts)
            ]
        }

    return factory


@pytest.fixture
def submission_factory():
    """Monta submissoes de aluno para uma sessao."""
    from quiz.models import StudentSubmission

    def factory(session_id: str, student_name: str = "Ana", count: int = 4):
        return StudentSubmission(
            student_name=student_name,
            session_id=session_id,
            answers=[
                {
                    "question": f"Question {i + 1}?",
                    "studentAnswer": f"Student {i + 1}",
                    "correctAnswer": f"Answer {i + 1}",
                    "type": "short_answer",
                }
                for i in range(count)
            ],
        )

    return factory


@pytest_asyncio.fixture
async def saved_quiz(repository, quiz_payload_factory):
    """Quiz de 4 questoes short_answer gravado no banco."""
    payload = quiz_payload_factory(count=4, types=("short_answer",))
    return await repository.insert_quiz(
        "quiz-1",
        {
            "user_id": "teacher-1",
            "title": "Quiz on Fractions",
            "grade_level": "5",
            "subject": "Math",
            "topic": "Fractions",
            "number_of_questions": 4,
            "question_types": ["short_answer"],
            "quiz_content": payload["quiz_content"],
            "teaching_insights": payload["teaching_insights"],
        },
    )


@pytest_asyncio.fixture
async def launched_session(repository, saved_quiz):
    """Sessao ativa do ``saved_quiz`` com codigo 123456."""
    await repository.insert_session(
        session_id="session-1",
        quiz_id=saved_quiz.id,
        user_id="teacher-1",
        class_name="Class 5A",
        notes=None,
        deployment_url="https://quiz.example.com/quiz/session-1",
        access_code="123456",
    )
    return "session-1"
