"""Context Extractor - Reads reference text for restricted-mode generation."""

import logging
from typing import Any

from quizform.errors import ExtractionError
from quizform.graph.state import QuizState

logger = logging.getLogger(__name__)


def extract_context(state: QuizState) -> dict[str, Any]:
    """
    Context Extractor: Read the reference document into the request.

    Extraction failures are not errors for the run: the request keeps no
    reference text and generation falls back to open mode.

    Args:
        state: Current quiz state containing request and reference

    Returns:
        Dictionary with updated request and extraction_error
    """
    request = state["request"]
    reference = state.get("reference")

    try:
        text = state["resolver"].extract(reference)
    except ExtractionError as e:
        logger.warning("Reference extraction failed, using topic only: %s", e)
        return {
            "request": request.model_copy(update={"reference_text": None}),
            "extraction_error": str(e),
        }

    logger.info("Extracted %d chars from reference, starting: %.50s...", len(text), text)
    return {
        "request": request.model_copy(update={"reference_text": text}),
        "extraction_error": None,
    }
