"""Prompt construction, generation, answer keys and grading."""

from .answer_key import build_answer_key
from .content_policy import asks_for_email, exclude_email_questions
from .generation_client import EndpointConfig, GenerationClient, parse_questions
from .grading import ItemOutcome, classify, grade, summarize
from .prompt_builder import build_prompt

__all__ = [
    "build_prompt",
    "EndpointConfig",
    "GenerationClient",
    "parse_questions",
    "asks_for_email",
    "exclude_email_questions",
    "build_answer_key",
    "ItemOutcome",
    "classify",
    "grade",
    "summarize",
]
