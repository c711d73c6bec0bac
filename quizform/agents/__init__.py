"""Workflow nodes for question generation."""

from .extractor import extract_context
from .generator import compose_prompt, generate_questions
from .validator import validate_questions

__all__ = [
    "extract_context",
    "compose_prompt",
    "generate_questions",
    "validate_questions",
]
