"""Quiz Templates - Prompts e mensagens fixas do ciclo de vida do quiz."""

import json

from ..models.enums import PerformanceTier, QuestionType
from ..models.performance import ClassPerformance
from ..models.schemas import StudentSubmission

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

QUIZ_SYSTEM_PROMPT = """You are an education assistant. Respond ONLY with valid JSON, no extra text."""

INSIGHTS_SYSTEM_PROMPT = """You are an AI teaching assistant. Respond in Markdown."""

# =============================================================================
# MENSAGENS FIXAS
# =============================================================================

NO_RESPONSES_MESSAGE = (
    "There are no student responses yet. Please wait for more students to submit the quiz."
)
NO_SESSION_DATA_MESSAGE = "No quiz data available."
INSIGHTS_UNAVAILABLE_MESSAGE = (
    "Smart insights could not be generated at this time. Please try again later."
)
INSIGHTS_ERROR_MESSAGE = "Smart insights could not be generated due to an error."

# =============================================================================
# GERACAO
# =============================================================================


def build_quiz_prompt(
    *,
    subject: str,
    topic: str,
    grade_level: str,
    number_of_questions: int,
    question_types: list[QuestionType],
    include_hints: bool = False,
    custom_instructions: str | None = None,
) -> str:
    """Monta o prompt de geracao com os tipos permitidos e regras de formato."""
    allowed = [t.value for t in question_types]
    allowed_list = "\n".join(f'- "{t}"' for t in allowed)
    quoted = ", ".join(f'"{t}"' for t in allowed)
    allowed_csv = ", ".join(allowed)

    field_rules = [
        '- "question" (string)',
        f'- "type" (string, one of: {quoted})',
        '- "correct_answer" (string)',
        '- "explanation" (string)',
    ]
    if include_hints:
        field_rules.append('- "hint" (string) - Required on every question.')
    if QuestionType.MULTIPLE_CHOICE in question_types:
        field_rules.append(
            '- If "type" is "multiple_choice", add "options" '
            "(array of exactly 4 strings, prefixed with A., B., C., D.)"
        )
    if QuestionType.TRUE_FALSE in question_types:
        field_rules.append(
            '- If "type" is "true_false", the correct answer must be "True" or "False" only.'
        )

    sample = {
        "question": "Sample question",
        "type": allowed[0],
        "correct_answer": "A. Sample answer",
        "explanation": "Explanation here",
    }
    if QuestionType.MULTIPLE_CHOICE in question_types:
        sample["options"] = ["A. Option 1", "B. Option 2", "C. Option 3", "D. Option 4"]
    if include_hints:
        sample["hint"] = "Sample hint here"

    output = {
        "title": f"Quiz on {topic}",
        "grade_level": grade_level,
        "subject": subject,
        "topic": topic,
        "number_of_questions": number_of_questions,
        "question_types": allowed,
        "quiz_content": [sample],
        "teaching_insights": "Short teaching insight here",
    }

    rules = "\n".join(field_rules)
    extra = f"\n- Additional instructions: {custom_instructions}" if custom_instructions else ""

    return f"""You are an expert AI quiz generator. Your job is to generate a STRICTLY FORMATTED JSON quiz.

=== QUIZ REQUIREMENTS ===
- Subject: {subject}
- Topic: {topic}
- Grade Level: {grade_level}
- Number of Questions: exactly {number_of_questions}
- MUST use only these question types: {allowed_csv}

=== QUESTION TYPES ===
You are strictly allowed to use ONLY the following types:
{allowed_list}

- Do NOT generate any type that is not listed above.
- Every multiple_choice question MUST have exactly 4 answer choices.
- Every true_false question MUST have "True" or "False" as its answer.

=== QUESTION FORMAT ===
Each question must include these fields:
{rules}

=== OUTPUT FORMAT ===
Return only valid JSON in this structure:
{json.dumps(output, indent=2)}

=== STRICT RULES ===
- Output must be 100% valid JSON.
- No extra commentary, preamble, or formatting.
- "quiz_content" must contain exactly {number_of_questions} questions.
- "type" must EXACTLY match the allowed types.
- Invalid responses will be rejected.{extra}
"""


# =============================================================================
# CORRECAO
# =============================================================================


def build_grading_prompt(submission: StudentSubmission) -> str:
    """Monta o prompt de correcao com a submissao completa embutida."""
    payload = submission.model_dump(by_alias=True)
    type_list = "\n".join(f'- "{t.value}"' for t in QuestionType)

    return f"""You are an expert AI assistant responsible for grading student quizzes.

You will be given a student's answers, the correct answers, and the type of question.
Your job is to grade each answer and explain why it is correct or incorrect.

=== GRADING REQUIREMENTS ===
- Compare the student's answer to the correct answer.
- Return a boolean field "isCorrect" for each question.
- Always provide a clear, helpful explanation.
- Grade every answer, in the same order as submitted.

=== QUESTION TYPES ===
{type_list}

=== OUTPUT FORMAT ===
{{
  "gradedAnswers": [
    {{
      "question": "string",
      "studentAnswer": "string",
      "correctAnswer": "string",
      "isCorrect": true,
      "explanation": "string"
    }}
  ]
}}

=== RULES ===
- Only return valid JSON matching the format.
- No extra text outside the JSON object.
- Keep explanations concise, clear, and helpful for the student.

=== SUBMISSION TO GRADE ===
{json.dumps(payload, indent=2)}
"""


# =============================================================================
# INSIGHTS
# =============================================================================


def _names(names: list[str]) -> str:
    return ", ".join(names) if names else "None"


def build_insights_prompt(performance: ClassPerformance) -> str:
    """Monta o prompt de insights a partir do desempenho agregado da turma."""
    if performance.most_missed:
        struggles = "\n".join(
            f"- **{m.question}** (Missed {m.times_missed} times)\n  Why? {m.reason}"
            for m in performance.most_missed
        )
        reinforcements = "\n\n".join(
            f'### Reinforce: "{m.question}"\n'
            f"**Why students struggled:** {m.reason}\n"
            f"**Try this approach:** suggest an engaging way to teach this topic."
            for m in performance.most_missed
        )
    else:
        struggles = "Students didn't seem to struggle significantly with any specific question."
        reinforcements = "No extra reinforcement needed this time."

    if performance.average_score < 60:
        closing = "This was a tough quiz. Consider a quick review session to clear up confusion."
    else:
        closing = "The class did well. A small recap might help reinforce key concepts."

    return f"""You are an AI Teaching Assistant helping a fellow teacher analyze their class quiz results.
Highlight patterns, identify struggles, and give specific, practical recommendations.

How to respond:
- Be friendly and conversational, like a teacher talking to another teacher.
- Use plain, simple English.
- Structure the insights with Markdown headings and bullet points.
- Base every suggestion on the data below; avoid generic advice.

---
## Quick Overview
- **Students who completed the quiz:** {performance.total_students}
- **Class Average Score:** {performance.average_score}%
- **Biggest Challenge:** {performance.top_struggle}

---
## What Students Struggled With
{struggles}

---
## Student Performance Breakdown
- **High Performers (80%+):** {_names(performance.students_in(PerformanceTier.TOP))}
- **Middle Performers (50-79%):** {_names(performance.students_in(PerformanceTier.MIDDLE))}
- **Struggling Students (<50%):** {_names(performance.students_in(PerformanceTier.STRUGGLING))}

---
## Smart Teaching Suggestions
{reinforcements}

---
## Final Thoughts
{closing}
""".strip()
