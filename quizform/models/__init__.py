"""Data models for quiz generation and grading."""

from .quiz import (
    DEFAULT_LANGUAGE,
    DEFAULT_QUESTION_COUNT,
    REFERENCE_MIN_LENGTH,
    AnswerKey,
    AnswerKeyEntry,
    FormItemDefinition,
    GeneratedQuestion,
    GenerationRequest,
    GradingResult,
    PublishResult,
    SubmissionResponse,
    SummaryRecord,
    WrongAnswerRecord,
    percent,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_QUESTION_COUNT",
    "REFERENCE_MIN_LENGTH",
    "GenerationRequest",
    "GeneratedQuestion",
    "FormItemDefinition",
    "AnswerKeyEntry",
    "AnswerKey",
    "SubmissionResponse",
    "WrongAnswerRecord",
    "GradingResult",
    "SummaryRecord",
    "PublishResult",
    "percent",
]
