"""State definition for the question generation workflow."""

from typing import TypedDict

from quizform.core.generation_client import GenerationClient
from quizform.extractors.document_extractor import ReferenceResolver
from quizform.models.quiz import (
    DEFAULT_LANGUAGE,
    REFERENCE_MIN_LENGTH,
    GeneratedQuestion,
    GenerationRequest,
)


class QuizState(TypedDict, total=False):
    """State passed between the generation workflow nodes."""

    # Input
    request: GenerationRequest
    reference: str | None

    # Collaborators and settings
    client: GenerationClient
    resolver: ReferenceResolver
    min_reference_length: int
    language: str

    # Produced along the way
    extraction_error: str | None
    prompt: str
    raw_output: str
    questions: list[GeneratedQuestion]


def create_initial_state(
    request: GenerationRequest,
    client: GenerationClient,
    reference: str | None = None,
    resolver: ReferenceResolver | None = None,
    min_reference_length: int = REFERENCE_MIN_LENGTH,
    language: str = DEFAULT_LANGUAGE,
) -> QuizState:
    """
    Create the initial state for a generation run.

    Args:
        request: Topic, question count and any pre-extracted reference text
        client: Generation endpoint client
        reference: Document path/URL/id to extract reference text from
        resolver: Reference resolver, defaults to one over ./documents
        min_reference_length: Reference text must be longer than this to restrict
        language: Output language for the questions

    Returns:
        Initial QuizState
    """
    return QuizState(
        request=request,
        reference=reference,
        client=client,
        resolver=resolver or ReferenceResolver(),
        min_reference_length=min_reference_length,
        language=language,
        extraction_error=None,
        prompt="",
        raw_output="",
        questions=[],
    )
