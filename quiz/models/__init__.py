"""Quiz Models - Enums, Schemas e snapshot de desempenho."""

from .enums import PerformanceTier, QuestionType, SessionStatus
from .performance import ClassPerformance, MissedQuestion
from .schemas import (
    GeneratedQuiz,
    GenerateQuizRequest,
    GradedAnswer,
    GradedQuizResponse,
    LaunchedQuiz,
    LaunchedSession,
    LaunchedSessionSummary,
    LaunchRequest,
    LaunchResult,
    Quiz,
    QuizQuestion,
    SessionOverview,
    StatusUpdateRequest,
    StatusUpdateResponse,
    StudentOverview,
    StudentResult,
    StudentSubmission,
    SubmissionAnswer,
)

__all__ = [
    # Enums
    "QuestionType",
    "SessionStatus",
    "PerformanceTier",
    # Schemas
    "QuizQuestion",
    "GeneratedQuiz",
    "Quiz",
    "GenerateQuizRequest",
    "LaunchRequest",
    "LaunchResult",
    "LaunchedSession",
    "LaunchedQuiz",
    "LaunchedSessionSummary",
    "SubmissionAnswer",
    "StudentSubmission",
    "GradedAnswer",
    "GradedQuizResponse",
    "StudentResult",
    "StatusUpdateRequest",
    "StatusUpdateResponse",
    "StudentOverview",
    "SessionOverview",
    # Performance
    "ClassPerformance",
    "MissedQuestion",
]
