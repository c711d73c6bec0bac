"""Exception types raised across quiz generation and grading."""

from enum import Enum


class QuizFormError(Exception):
    """Base class for all quizform errors."""


class ExtractionError(QuizFormError):
    """Reference document could not be read or holds too little text."""


class GenerationErrorKind(str, Enum):
    """Why a generation call failed."""

    TRANSPORT = "transport"
    BLOCKED = "blocked"
    MALFORMED_OUTPUT = "malformed_output"


class GenerationError(QuizFormError):
    """The generation endpoint did not return a usable question list."""

    def __init__(self, kind: GenerationErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class QuestionValidationError(QuizFormError):
    """A generated question object is malformed or missing required fields."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"question {index}: {message}"
        super().__init__(message)


class AnswerKeyNotFoundError(QuizFormError):
    """No answer key is stored for the requested quiz."""


class UnknownQuizError(QuizFormError):
    """The form host has no form with the requested id."""
