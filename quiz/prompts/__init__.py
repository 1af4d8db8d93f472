"""Quiz Prompts - Templates de prompts e mensagens fixas."""

from .templates import (
    INSIGHTS_ERROR_MESSAGE,
    INSIGHTS_SYSTEM_PROMPT,
    INSIGHTS_UNAVAILABLE_MESSAGE,
    NO_RESPONSES_MESSAGE,
    NO_SESSION_DATA_MESSAGE,
    QUIZ_SYSTEM_PROMPT,
    build_grading_prompt,
    build_insights_prompt,
    build_quiz_prompt,
)

__all__ = [
    "QUIZ_SYSTEM_PROMPT",
    "INSIGHTS_SYSTEM_PROMPT",
    "NO_RESPONSES_MESSAGE",
    "NO_SESSION_DATA_MESSAGE",
    "INSIGHTS_UNAVAILABLE_MESSAGE",
    "INSIGHTS_ERROR_MESSAGE",
    "build_quiz_prompt",
    "build_grading_prompt",
    "build_insights_prompt",
]
