"""Quiz Generator - Geracao de quizzes via provider com validacao estrita."""

import logging
import uuid

from ..errors import GenerationError, ProviderError, ValidationError
from ..llm import ContentGateway
from ..models.enums import QuestionType
from ..models.schemas import GenerateQuizRequest, Quiz
from ..prompts import build_quiz_prompt
from ..storage import QuizRepository
from .validation import validate_quiz_payload

logger = logging.getLogger(__name__)


def normalize_question_types(raw_types: list[str]) -> list[QuestionType]:
    """Normaliza rotulos de tipo, removendo duplicados e mantendo a ordem.

    Raises:
        ValidationError: Lista vazia ou rotulo desconhecido
    """
    types: list[QuestionType] = []
    for raw in raw_types:
        try:
            question_type = QuestionType.normalize(raw)
        except ValueError:
            raise ValidationError(f"Unsupported question type: {raw}") from None
        if question_type not in types:
            types.append(question_type)

    if not types:
        raise ValidationError("At least one question type is required")
    return types


class QuizGenerator:
    """Gera, valida e persiste quizzes.

    Fluxo:
        1. Valida o pedido (campos obrigatorios, tipos)
        2. Monta o prompt com tipos permitidos e regras de formato
        3. Chama o provider uma unica vez (sem retry)
        4. Valida a resposta contra o schema do quiz
        5. Persiste e retorna a linha gravada

    Example:
        >>> generator = QuizGenerator(gateway, repository)
        >>> quiz = await generator.generate("teacher-1", request)
    """

    def __init__(self, gateway: ContentGateway, repository: QuizRepository):
        self.gateway = gateway
        self.repository = repository

    @staticmethod
    def _check_request(request: GenerateQuizRequest) -> list[QuestionType]:
        missing = [
            name
            for name, value in (
                ("subject", request.subject),
                ("topic", request.topic),
                ("gradeLevel", request.grade_level),
            )
            if not value or not value.strip()
        ]
        if request.number_of_questions < 1:
            missing.append("numberOfQuestions")
        if not request.question_types:
            missing.append("questionTypes")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        return normalize_question_types(request.question_types)

    async def generate(self, teacher_id: str, request: GenerateQuizRequest) -> Quiz:
        """Gera um quiz para o professor.

        Raises:
            ValidationError: Pedido incompleto ou tipo desconhecido
            GenerationError: Provider falhou ou resposta fora do schema
            PersistenceError: Falha ao gravar o quiz
        """
        question_types = self._check_request(request)
        subject = request.subject.strip()
        topic = request.topic.strip()
        grade_level = request.grade_level.strip()

        prompt = build_quiz_prompt(
            subject=subject,
            topic=topic,
            grade_level=grade_level,
            number_of_questions=request.number_of_questions,
            question_types=question_types,
            include_hints=request.include_hints,
            custom_instructions=request.custom_instructions,
        )

        try:
            payload = await self.gateway.generate_content(prompt)
        except ProviderError as e:
            logger.error(f"Provider falhou na geracao (topic={topic!r}): {e}")
            raise GenerationError("Failed to generate quiz.") from e

        try:
            generated = validate_quiz_payload(
                payload,
                question_types=question_types,
                number_of_questions=request.number_of_questions,
                include_hints=request.include_hints,
            )
        except GenerationError as e:
            logger.warning(f"Quiz rejeitado (topic={topic!r}): {e.message}")
            raise

        quiz_id = str(uuid.uuid4())
        quiz = await self.repository.insert_quiz(
            quiz_id,
            {
                "user_id": teacher_id,
                "title": f"Quiz on {topic}",
                "grade_level": grade_level,
                "subject": subject,
                "topic": topic,
                "number_of_questions": request.number_of_questions,
                "question_types": [t.value for t in question_types],
                "quiz_content": [q.model_dump(mode="json") for q in generated.quiz_content],
                "teaching_insights": generated.teaching_insights,
                "custom_instructions": request.custom_instructions,
            },
        )
        logger.info(
            f"[Quiz {quiz_id}] Gerado: {len(generated.quiz_content)} questoes "
            f"({', '.join(t.value for t in question_types)})"
        )
        return quiz
