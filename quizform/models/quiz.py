"""Pydantic models for quiz data structures."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_QUESTION_COUNT = 5
DEFAULT_LANGUAGE = "繁體中文 (台灣用語)"
REFERENCE_MIN_LENGTH = 50
OPTION_COUNT = 4


def percent(count: int, total: int) -> int:
    """Return count/total as a whole percent, rounding halves up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


class GenerationRequest(BaseModel):
    """What to generate: a topic, how many questions, and optional source text."""

    topic: str = Field(default="", description="Topic or keyword for the questions")
    question_count: int = Field(
        default=DEFAULT_QUESTION_COUNT,
        description="Number of questions to generate",
    )
    reference_text: str | None = Field(
        None,
        description="Extracted reference document text",
    )

    @field_validator("question_count", mode="before")
    @classmethod
    def default_non_positive_count(cls, v: Any) -> Any:
        """Fall back to the default count when absent or non-positive."""
        if v is None or (isinstance(v, int) and v <= 0):
            return DEFAULT_QUESTION_COUNT
        return v


class GeneratedQuestion(BaseModel):
    """A single multiple-choice question as returned by the generation endpoint."""

    question_text: str = Field(
        ...,
        min_length=1,
        validation_alias="question",
        serialization_alias="question",
        description="The question text",
    )
    options: list[str] = Field(
        ...,
        description="Exactly four answer options",
    )
    answer_index: int = Field(
        ...,
        ge=0,
        le=OPTION_COUNT - 1,
        validation_alias="answerIndex",
        serialization_alias="answerIndex",
        description="Index of the correct option",
    )
    explanation: str = Field(
        default="",
        description="Explanation of the correct answer",
    )
    points: int = Field(
        default=1,
        ge=1,
        description="Points awarded for a correct answer",
    )

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Ensure there are exactly four non-empty options."""
        if len(v) != OPTION_COUNT:
            raise ValueError(f"Expected {OPTION_COUNT} options, got {len(v)}")
        for i, option in enumerate(v):
            if not option or not option.strip():
                raise ValueError(f"Option {i} cannot be empty")
        return v

    @field_validator("explanation", mode="before")
    @classmethod
    def empty_explanation(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("points", mode="before")
    @classmethod
    def default_points(cls, v: Any) -> Any:
        """Missing or zero points count as 1."""
        return 1 if not v else v

    @property
    def correct_option(self) -> str:
        """Literal text of the correct option."""
        return self.options[self.answer_index]

    def to_wire(self) -> dict[str, Any]:
        """Serialize back to the generation wire format."""
        return self.model_dump(by_alias=True)

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "question": "光合作用主要在植物細胞的哪個胞器中進行？",
                "options": ["粒線體", "葉綠體", "細胞核", "高基氏體"],
                "answerIndex": 1,
                "explanation": "葉綠體含有葉綠素，是進行光合作用的場所。",
                "points": 1,
            }
        },
    }


class FormItemDefinition(BaseModel):
    """A multiple-choice item as handed to the form host for rendering."""

    item_id: str
    title: str
    choices: list[str]
    correct_choice: str
    points: int = Field(default=1, ge=1)
    feedback_correct: str | None = None
    feedback_incorrect: str | None = None


class AnswerKeyEntry(BaseModel):
    """Canonical question/answer for one form item, used at grading time."""

    item_id: str = Field(..., min_length=1)
    question_text: str
    correct_answer_text: str
    explanation: str = ""


class AnswerKey(BaseModel):
    """All answer-key entries for one quiz, keyed by item id in form order."""

    quiz_id: str = Field(..., min_length=1)
    entries: dict[str, AnswerKeyEntry] = Field(default_factory=dict)

    @model_validator(mode="after")
    def keys_match_entries(self) -> "AnswerKey":
        for item_id, entry in self.entries.items():
            if entry.item_id != item_id:
                raise ValueError(
                    f"Entry keyed {item_id!r} carries item id {entry.item_id!r}"
                )
        return self

    def get(self, item_id: str) -> AnswerKeyEntry | None:
        return self.entries.get(item_id)

    def __len__(self) -> int:
        return len(self.entries)


class SubmissionResponse(BaseModel):
    """One respondent's submission as delivered by the form host."""

    quiz_id: str = Field(..., min_length=1)
    quiz_title: str = ""
    respondent_id: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
    item_answers: dict[str, str | None] = Field(
        default_factory=dict,
        description="Selected answer text per item id, in form order",
    )
    item_positions: dict[str, int] = Field(
        default_factory=dict,
        description="1-based position of each item within the form",
    )


class WrongAnswerRecord(BaseModel):
    """An incorrectly answered item."""

    item_id: str
    position: int | None = None
    question_text: str
    student_answer: str
    correct_answer: str
    explanation: str = ""


class GradingResult(BaseModel):
    """Outcome of grading one submission."""

    items_seen: int = Field(default=0, ge=0)
    total_graded: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    wrong_count: int = Field(default=0, ge=0)
    blank_count: int = Field(default=0, ge=0)
    wrong_records: list[WrongAnswerRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def counts_add_up(self) -> "GradingResult":
        if self.correct_count + self.wrong_count + self.blank_count != self.total_graded:
            raise ValueError("correct + wrong + blank must equal total graded")
        return self

    @property
    def correct_percent(self) -> int:
        return percent(self.correct_count, self.total_graded)

    @property
    def wrong_percent(self) -> int:
        return percent(self.wrong_count, self.total_graded)

    @property
    def blank_percent(self) -> int:
        return percent(self.blank_count, self.total_graded)

    @property
    def correct_rate(self) -> str:
        return f"{self.correct_percent}%"

    @property
    def wrong_rate(self) -> str:
        return f"{self.wrong_percent}%"

    @property
    def blank_rate(self) -> str:
        return f"{self.blank_percent}%"


class SummaryRecord(BaseModel):
    """Per-submission statistics row."""

    quiz_updated_at: str = Field(..., description="When the quiz items were last generated")
    graded_at: datetime
    total_graded: int = Field(..., ge=0)
    quiz_title: str
    correct_rate: str
    wrong_rate: str
    blank_rate: str


class PublishResult(BaseModel):
    """Where a generated quiz was published."""

    form_id: str
    url: str
    updated_at: str
    total_questions: int = Field(..., ge=0, description="Questions submitted, before content filtering")
