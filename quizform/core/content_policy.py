"""Content policies applied to generated questions before they reach a form."""

import re
from collections.abc import Callable

from quizform.models.quiz import GeneratedQuestion

QuestionPolicy = Callable[[GeneratedQuestion], bool]

EMAIL_QUESTION_PATTERN = re.compile(r"電子郵件|e-?mail", re.IGNORECASE)


def asks_for_email(question: GeneratedQuestion) -> bool:
    """True if the question asks the respondent for contact details."""
    return bool(EMAIL_QUESTION_PATTERN.search(question.question_text))


def exclude_email_questions(question: GeneratedQuestion) -> bool:
    """Default policy: keep every question that does not ask for an email."""
    return not asks_for_email(question)


def apply_policy(
    questions: list[GeneratedQuestion], policy: QuestionPolicy = exclude_email_questions
) -> list[GeneratedQuestion]:
    """Keep the questions the policy accepts, preserving order."""
    return [q for q in questions if policy(q)]
