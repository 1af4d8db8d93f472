"""Quiz Module - Ciclo de vida do quiz: geracao, lancamento, correcao e relatorios.

Arquitetura:
- models/: Enums, Schemas Pydantic, ClassPerformance
- engine/: Generator, LaunchManager, AccessVerifier, Grader, Stats, Insights
- llm/: ContentGateway (Claude Agent SDK)
- storage/: Database (SQLite) e QuizRepository
- prompts/: Templates de prompts e mensagens fixas
- service.py: QuizService (casos de uso)
- router.py: FastAPI endpoints
"""

from .engine import (
    AccessVerifier,
    InsightsGenerator,
    LaunchManager,
    QuizGenerator,
    QuizScoringEngine,
    StatsAggregator,
    SubmissionGrader,
)
from .errors import QuizError
from .llm import ContentGateway
from .models import QuestionType, Quiz, QuizQuestion, SessionStatus
from .service import QuizService
from .storage import Database, QuizRepository

__all__ = [
    # Models
    "QuestionType",
    "SessionStatus",
    "Quiz",
    "QuizQuestion",
    # Engines
    "QuizGenerator",
    "LaunchManager",
    "AccessVerifier",
    "SubmissionGrader",
    "StatsAggregator",
    "InsightsGenerator",
    "QuizScoringEngine",
    # Service
    "QuizService",
    "QuizError",
    # LLM
    "ContentGateway",
    # Storage
    "Database",
    "QuizRepository",
]
