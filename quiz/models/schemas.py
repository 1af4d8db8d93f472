"""Quiz Schemas - Modelos Pydantic para request/response e linhas persistidas."""

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .enums import QuestionType, SessionStatus

MULTIPLE_CHOICE_OPTIONS = 4


class CamelModel(BaseModel):
    """Base para payloads trafegados em camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# QUIZ
# =============================================================================


class QuizQuestion(BaseModel):
    """Questao gerada pelo provider.

    Regras por tipo:
        - multiple_choice: exatamente 4 alternativas em ``options``
        - true_false: ``correct_answer`` resolvido para "True"/"False"
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    question: str = Field(..., min_length=1, description="Enunciado da questao")
    type: QuestionType = Field(..., description="Tipo da questao")
    correct_answer: str = Field(..., min_length=1, description="Resposta correta")
    explanation: str = Field(..., min_length=1, description="Explicacao da resposta")
    hint: str | None = Field(default=None, description="Dica opcional")
    options: list[str] | None = Field(default=None, description="Alternativas (multiple_choice)")

    @model_validator(mode="after")
    def check_type_shape(self) -> "QuizQuestion":
        if self.type == QuestionType.MULTIPLE_CHOICE:
            if self.options is None or len(self.options) != MULTIPLE_CHOICE_OPTIONS:
                raise ValueError(
                    f"multiple_choice questions need exactly {MULTIPLE_CHOICE_OPTIONS} options"
                )
        if self.type == QuestionType.TRUE_FALSE:
            answer = self.correct_answer.lower()
            if answer not in ("true", "false"):
                raise ValueError("true_false questions must resolve to 'True' or 'False'")
            self.correct_answer = answer.capitalize()
        return self


class GeneratedQuiz(BaseModel):
    """Payload estruturado esperado do provider na geracao."""

    quiz_content: list[QuizQuestion]
    teaching_insights: str


class Quiz(BaseModel):
    """Quiz persistido (imutavel apos a criacao)."""

    id: str
    user_id: str
    title: str
    grade_level: str
    subject: str
    topic: str
    number_of_questions: int
    question_types: list[QuestionType]
    quiz_content: list[QuizQuestion]
    teaching_insights: str
    custom_instructions: str | None = None
    created_at: str


class GenerateQuizRequest(CamelModel):
    """Request de geracao. Campos obrigatorios sao checados pelo gerador."""

    subject: str = ""
    topic: str = ""
    grade_level: str = ""
    number_of_questions: int = 0
    question_types: list[str] = Field(default_factory=list)
    custom_instructions: str | None = None
    include_hints: bool = False


# =============================================================================
# SESSAO LANCADA
# =============================================================================


class LaunchRequest(CamelModel):
    """Request para lancar um quiz para uma turma."""

    class_name: str = ""
    notes: str | None = None


class LaunchResult(BaseModel):
    """Resultado do lancamento (chaves do wire: launchId, deploymentLink...)."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Quiz launched successfully!"
    session_id: str = Field(..., serialization_alias="launchId")
    distribution_url: str = Field(..., serialization_alias="deploymentLink")
    qr_image: str = Field(..., serialization_alias="qrCodeData")
    access_code: str = Field(..., serialization_alias="accessCode")


class LaunchedSession(BaseModel):
    """Linha de launched_quizzes."""

    id: str
    quiz_id: str
    user_id: str
    class_name: str
    notes: str | None = None
    deployment_url: str
    access_code: str | None = None
    status: SessionStatus = SessionStatus.ACTIVE
    students_completed: int = 0
    average_score: int = 0
    smart_insights: str | None = None
    created_at: str


class LaunchedQuiz(BaseModel):
    """Sessao + quiz como entregue ao aluno."""

    id: str
    quiz_id: str
    class_name: str
    notes: str | None = None
    status: SessionStatus
    created_at: str
    title: str
    quiz_content: list[QuizQuestion]


class LaunchedSessionSummary(BaseModel):
    """Item da listagem de sessoes do professor."""

    id: str
    quiz_id: str
    class_name: str
    launch_date: str
    title: str
    status: SessionStatus
    students_completed: int
    average_score: int
    deployment_url: str


# =============================================================================
# CORRECAO
# =============================================================================


class SubmissionAnswer(CamelModel):
    """Resposta do aluno com o gabarito da questao."""

    question: str
    student_answer: str = ""
    correct_answer: str = ""
    type: str = ""

    @field_validator("student_answer", "correct_answer", mode="before")
    @classmethod
    def coerce_text(cls, value):
        # Questao pulada chega como null
        if value is None:
            return ""
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value


class StudentSubmission(CamelModel):
    """Submissao de um aluno para uma sessao."""

    student_name: str = ""
    # deploymentId: nome usado pelos clientes legados
    session_id: str = Field(
        default="",
        validation_alias=AliasChoices("sessionId", "deploymentId", "session_id"),
    )
    answers: list[SubmissionAnswer] = Field(default_factory=list)


class GradedAnswer(CamelModel):
    """Resposta corrigida pelo provider."""

    question: str
    student_answer: str
    correct_answer: str
    is_correct: StrictBool
    explanation: str

    @field_validator("student_answer", "correct_answer", mode="before")
    @classmethod
    def coerce_text(cls, value):
        # Provider as vezes devolve numeros/booleanos crus
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value


class GradedQuizResponse(CamelModel):
    """Payload de correcao: {"gradedAnswers": [...]}."""

    graded_answers: list[GradedAnswer]


class StudentResult(BaseModel):
    """Linha de student_quiz_results."""

    id: int
    session_id: str
    student_name: str
    graded_answers: list[GradedAnswer]
    score_percentage: float
    created_at: str


# =============================================================================
# STATUS E RELATORIO
# =============================================================================


class StatusUpdateRequest(BaseModel):
    """Request de mudanca de status ("active" | "closed")."""

    status: str = ""


class StatusUpdateResponse(CamelModel):
    """Resultado do fechamento/atualizacao da sessao."""

    message: str
    status: SessionStatus
    smart_insights: str | None = None


class StudentOverview(BaseModel):
    """Linha de aluno no relatorio da sessao."""

    id: int
    name: str
    score: float
    correct: int
    incorrect: int
    status: str = "Completed"


class SessionOverview(CamelModel):
    """Relatorio agregado da sessao para o professor."""

    id: str
    title: str
    class_name: str
    launch_date: str
    students_taken: int
    average_score: int
    status: SessionStatus
    launch_url: str
    qr_code_data: str | None = None
    access_code: str | None = None
    total_questions: int
    smart_insights: str | None = None
    students: list[StudentOverview] = Field(default_factory=list)
