"""LangGraph workflow definition for question generation."""

from typing import Literal

from langgraph.graph import END, StateGraph

from quizform.agents.extractor import extract_context
from quizform.agents.generator import compose_prompt, generate_questions
from quizform.agents.validator import validate_questions
from quizform.config.settings import Settings, get_settings
from quizform.core.generation_client import EndpointConfig, GenerationClient
from quizform.extractors.document_extractor import ReferenceResolver
from quizform.graph.state import QuizState, create_initial_state
from quizform.models.quiz import GeneratedQuestion, GenerationRequest


def route_start(state: QuizState) -> Literal["extract", "prompt"]:
    """
    Decide whether a reference document has to be read first.

    Args:
        state: Current quiz state

    Returns:
        "extract" when a reference was given, "prompt" otherwise
    """
    if state.get("reference"):
        return "extract"
    return "prompt"


def create_generation_workflow() -> StateGraph:
    """
    Create the LangGraph workflow for question generation.

    The workflow follows this structure:
    1. [Conditional] Extractor - Reads the reference document, if any
    2. Prompt composer - Chooses restricted or open mode
    3. Generator - Calls the generation endpoint
    4. Validator - Parses the output into questions

    Returns:
        StateGraph ready to compile
    """
    workflow = StateGraph(QuizState)

    workflow.add_node("extractor", extract_context)
    workflow.add_node("prompter", compose_prompt)
    workflow.add_node("generator", generate_questions)
    workflow.add_node("validator", validate_questions)

    workflow.set_conditional_entry_point(
        route_start,
        {
            "extract": "extractor",
            "prompt": "prompter",
        },
    )

    workflow.add_edge("extractor", "prompter")
    workflow.add_edge("prompter", "generator")
    workflow.add_edge("generator", "validator")
    workflow.add_edge("validator", END)

    return workflow


def compile_workflow():
    """
    Compile the workflow and return it ready for execution.

    Returns:
        Compiled workflow
    """
    return create_generation_workflow().compile()


def generate_quiz_questions(
    topic: str,
    question_count: int | None = None,
    reference: str | None = None,
    *,
    settings: Settings | None = None,
    client: GenerationClient | None = None,
    resolver: ReferenceResolver | None = None,
) -> list[GeneratedQuestion]:
    """
    Generate validated questions for a topic, optionally from a reference document.

    Raises:
        GenerationError: the endpoint call failed or returned unusable output
        QuestionValidationError: a generated question is malformed
    """
    settings = settings or get_settings()
    client = client or GenerationClient(EndpointConfig.from_settings(settings))
    request = GenerationRequest(
        topic=topic,
        question_count=(
            question_count
            if question_count and question_count > 0
            else settings.default_question_count
        ),
    )

    state = create_initial_state(
        request,
        client,
        reference=reference,
        resolver=resolver or ReferenceResolver(settings.document_dir),
        min_reference_length=settings.reference_min_length,
        language=settings.output_language,
    )
    final_state = compile_workflow().invoke(state)
    return final_state["questions"]
