"""Quiz publishing and submission handling."""

from .quiz_service import create_quiz, handle_submission, update_fixed_quiz

__all__ = ["create_quiz", "update_fixed_quiz", "handle_submission"]
