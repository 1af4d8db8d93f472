"""Validation - Fronteira de validacao das respostas do provider.

O provider e tratado como fonte nao confiavel: cada formato esperado tem
um schema explicito e qualquer violacao rejeita a resposta inteira.
"""

from typing import Any

from pydantic import ValidationError as SchemaError

from ..errors import GenerationError
from ..models.enums import QuestionType
from ..models.schemas import GeneratedQuiz, GradedAnswer, GradedQuizResponse


class MalformedGradingError(ValueError):
    """Resposta de correcao fora do formato esperado."""


def _first_error(error: SchemaError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}"


def validate_quiz_payload(
    payload: Any,
    *,
    question_types: list[QuestionType],
    number_of_questions: int,
    include_hints: bool = False,
) -> GeneratedQuiz:
    """Valida o quiz gerado contra o schema e os parametros do pedido.

    Regras:
        - ``quiz_content`` (lista) e ``teaching_insights`` (string) presentes
        - cada questao passa na regra do seu tipo (ver ``QuizQuestion``)
        - apenas tipos pedidos; ``hint`` obrigatorio se hints habilitados
        - quantidade de questoes igual a ``number_of_questions``

    Raises:
        GenerationError: Em qualquer violacao (sem retry na geracao)
    """
    if (
        not isinstance(payload, dict)
        or not isinstance(payload.get("quiz_content"), list)
        or not isinstance(payload.get("teaching_insights"), str)
    ):
        raise GenerationError("AI response is missing expected fields.")

    try:
        quiz = GeneratedQuiz.model_validate(payload)
    except SchemaError as e:
        raise GenerationError(f"AI response failed quiz validation ({_first_error(e)})") from e

    allowed = set(question_types)
    for index, question in enumerate(quiz.quiz_content, start=1):
        if question.type not in allowed:
            raise GenerationError(
                f"Question {index} has type '{question.type.value}' which was not requested"
            )
        if include_hints and not (question.hint and question.hint.strip()):
            raise GenerationError(f"Question {index} is missing the required hint")

    if len(quiz.quiz_content) != number_of_questions:
        raise GenerationError(
            f"AI returned {len(quiz.quiz_content)} questions, expected {number_of_questions}"
        )

    return quiz


def validate_graded_payload(payload: Any, *, expected_count: int) -> list[GradedAnswer]:
    """Valida a resposta de correcao.

    Raises:
        MalformedGradingError: Sem array ``gradedAnswers``, item invalido ou
            quantidade diferente das respostas enviadas
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("gradedAnswers"), list):
        raise MalformedGradingError("Response has no 'gradedAnswers' array")

    try:
        graded = GradedQuizResponse.model_validate(payload).graded_answers
    except SchemaError as e:
        raise MalformedGradingError(f"Invalid graded answer ({_first_error(e)})") from e

    if len(graded) != expected_count:
        raise MalformedGradingError(
            f"Graded {len(graded)} answers, submission had {expected_count}"
        )
    return graded
