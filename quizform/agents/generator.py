"""Question Generator Agent - Builds the prompt and calls the generation endpoint."""

import logging
from typing import Any

from quizform.core.prompt_builder import (
    DEFAULT_LANGUAGE,
    REFERENCE_MIN_LENGTH,
    build_prompt,
    is_restricted_mode,
)
from quizform.graph.state import QuizState

logger = logging.getLogger(__name__)


def compose_prompt(state: QuizState) -> dict[str, Any]:
    """
    Prompt Composer: Turn the generation request into prompt text.

    Args:
        state: Current quiz state containing request

    Returns:
        Dictionary with updated state containing prompt
    """
    request = state["request"]
    min_length = state.get("min_reference_length", REFERENCE_MIN_LENGTH)

    prompt = build_prompt(
        request.topic,
        request.question_count,
        request.reference_text,
        min_reference_length=min_length,
        language=state.get("language", DEFAULT_LANGUAGE),
    )
    mode = "restricted" if is_restricted_mode(request.reference_text, min_length) else "open"
    logger.info(
        "Built %s-mode prompt for topic %r (%d questions)", mode, request.topic, request.question_count
    )
    return {"prompt": prompt}


def generate_questions(state: QuizState) -> dict[str, Any]:
    """
    Question Generator Agent: Send the prompt and keep the cleaned JSON text.

    GenerationError propagates to the caller unchanged; nothing is retried.

    Args:
        state: Current quiz state containing prompt and client

    Returns:
        Dictionary with updated state containing raw_output
    """
    raw_output = state["client"].generate_raw(state["prompt"])
    return {"raw_output": raw_output}
