"""Question Validator Agent - Checks generated JSON against the question schema."""

import logging
from typing import Any

from quizform.core.generation_client import parse_questions
from quizform.graph.state import QuizState

logger = logging.getLogger(__name__)


def validate_questions(state: QuizState) -> dict[str, Any]:
    """
    Question Validator Agent: Parse the raw output into GeneratedQuestion objects.

    Raises QuestionValidationError for any malformed question, so nothing
    invalid reaches the answer key.

    Args:
        state: Current quiz state containing raw_output

    Returns:
        Dictionary with updated state containing questions
    """
    questions = parse_questions(state["raw_output"])
    requested = state["request"].question_count
    if len(questions) != requested:
        logger.warning("Requested %d questions but received %d", requested, len(questions))
    return {"questions": questions}
