"""Quiz Engines - Logica de negocios do ciclo de vida do quiz."""

from .access import AccessVerifier
from .generator import QuizGenerator, normalize_question_types
from .grader import GRADING_FAILED_MESSAGE, SubmissionGrader
from .insights import InsightsGenerator
from .launch import LaunchManager, build_distribution_url, encode_qr, generate_access_code
from .retry import RetryOutcome, retry_async
from .scoring_engine import QuizScoringEngine
from .stats import StatsAggregator
from .validation import MalformedGradingError, validate_graded_payload, validate_quiz_payload

__all__ = [
    "AccessVerifier",
    "GRADING_FAILED_MESSAGE",
    "InsightsGenerator",
    "LaunchManager",
    "MalformedGradingError",
    "QuizGenerator",
    "QuizScoringEngine",
    "RetryOutcome",
    "StatsAggregator",
    "SubmissionGrader",
    "build_distribution_url",
    "encode_qr",
    "generate_access_code",
    "normalize_question_types",
    "retry_async",
    "validate_graded_payload",
    "validate_quiz_payload",
]
