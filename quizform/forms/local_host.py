"""File-backed form host: issues item ids, stores rendered items, captures submissions."""

import logging
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from quizform.core.answer_key import build_answer_key
from quizform.core.content_policy import QuestionPolicy, exclude_email_questions
from quizform.errors import UnknownQuizError
from quizform.models.quiz import AnswerKey, GeneratedQuestion, SubmissionResponse
from quizform.storage.answer_key_store import AnswerKeyStore

logger = logging.getLogger(__name__)

UPDATED_AT_PREFIX = "📅 更新時間："
UPDATED_AT_FORMAT = "%Y/%m/%d %H:%M"
UNKNOWN_UPDATED_AT = "未知"
CONFIRMATION_MESSAGE = "✅ 測驗完成！請查看下方分數與正解。"
DEFAULT_FORM_TITLE = "自動產生測驗"


class ItemType(str, Enum):
    """Kinds of form items."""

    PARAGRAPH = "paragraph"
    MULTIPLE_CHOICE = "multiple_choice"


class FormItem(BaseModel):
    """One item on a form."""

    item_id: str
    item_type: ItemType
    title: str
    choices: list[str] = Field(default_factory=list)
    correct_choice: str | None = None
    points: int = 0
    feedback_correct: str | None = None
    feedback_incorrect: str | None = None


class Form(BaseModel):
    """A quiz form as stored by the local host."""

    form_id: str
    title: str
    created_at: datetime = Field(default_factory=datetime.now)
    is_quiz: bool = False
    collect_email: bool = False
    publish_summary: bool = False
    confirmation_message: str = ""
    items: list[FormItem] = Field(default_factory=list)

    @property
    def question_count(self) -> int:
        return sum(1 for item in self.items if item.item_type == ItemType.MULTIPLE_CHOICE)


class LocalFormHost:
    """Keeps each form as ``<directory>/<form_id>.json``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    @staticmethod
    def new_item_id() -> str:
        return uuid.uuid4().hex

    def create_form(self, title: str | None = None) -> Form:
        form = Form(form_id=uuid.uuid4().hex, title=title or DEFAULT_FORM_TITLE)
        self.save(form)
        logger.info("Created form %s (%s)", form.form_id, form.title)
        return form

    def open_form(self, form_id: str) -> Form:
        path = self._path(form_id)
        if not path.exists():
            raise UnknownQuizError(f"No form with id {form_id}")
        return Form.model_validate_json(path.read_text(encoding="utf-8"))

    def save(self, form: Form) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(form.form_id).write_text(form.model_dump_json(indent=2), encoding="utf-8")

    def url(self, form: Form) -> str:
        return self._path(form.form_id).resolve().as_uri()

    def rebuild_items(
        self,
        form: Form,
        questions: list[GeneratedQuestion],
        *,
        store: AnswerKeyStore | None = None,
        skip_choice: str | None = None,
        policy: QuestionPolicy = exclude_email_questions,
        now: datetime | None = None,
    ) -> AnswerKey:
        """
        Replace every item on the form with freshly generated questions.

        The first item is a paragraph stamped with the update time. Item ids
        are issued here and recorded in the answer key, which replaces any
        previous key for the form when a store is given.

        Returns:
            The new answer key
        """
        form.is_quiz = True
        form.collect_email = True
        form.publish_summary = True
        form.confirmation_message = CONFIRMATION_MESSAGE

        stamp = (now or datetime.now()).strftime(UPDATED_AT_FORMAT)
        form.items = [
            FormItem(
                item_id=self.new_item_id(),
                item_type=ItemType.PARAGRAPH,
                title=f"{UPDATED_AT_PREFIX}{stamp}",
            )
        ]

        answer_key, definitions = build_answer_key(
            form.form_id,
            questions,
            self.new_item_id,
            policy=policy,
            skip_choice=skip_choice,
            store=store,
        )
        for definition in definitions:
            form.items.append(
                FormItem(
                    item_id=definition.item_id,
                    item_type=ItemType.MULTIPLE_CHOICE,
                    title=definition.title,
                    choices=definition.choices,
                    correct_choice=definition.correct_choice,
                    points=definition.points,
                    feedback_correct=definition.feedback_correct,
                    feedback_incorrect=definition.feedback_incorrect,
                )
            )

        self.save(form)
        logger.info("Rebuilt form %s with %d question(s)", form.form_id, len(definitions))
        return answer_key

    def submit(
        self,
        form_id: str,
        answers: dict[str, str | None],
        respondent_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> SubmissionResponse:
        """
        Record a response the way a respondent would fill the form.

        Every multiple-choice item is delivered, unanswered ones as None.
        Other items are delivered only when answered.

        Raises:
            UnknownQuizError: the form does not exist
            ValueError: an answer targets an unknown item or is not one of its choices
        """
        form = self.open_form(form_id)

        unknown = set(answers) - {item.item_id for item in form.items}
        if unknown:
            raise ValueError(f"Unknown item id(s): {', '.join(sorted(unknown))}")

        item_answers: dict[str, str | None] = {}
        item_positions: dict[str, int] = {}
        for position, item in enumerate(form.items, start=1):
            answer = answers.get(item.item_id)
            if item.item_type == ItemType.MULTIPLE_CHOICE:
                if answer and answer not in item.choices:
                    raise ValueError(f"{answer!r} is not a choice of item {item.item_id}")
            elif not answer:
                continue
            item_answers[item.item_id] = answer
            item_positions[item.item_id] = position

        return SubmissionResponse(
            quiz_id=form.form_id,
            quiz_title=form.title,
            respondent_id=respondent_id,
            timestamp=timestamp or datetime.now(),
            item_answers=item_answers,
            item_positions=item_positions,
        )

    @staticmethod
    def updated_at(form: Form) -> str:
        """Recover the update stamp from the form's first item."""
        if form.items:
            first = form.items[0]
            if first.item_type == ItemType.PARAGRAPH and first.title.startswith(UPDATED_AT_PREFIX):
                return first.title[len(UPDATED_AT_PREFIX):].strip()
        return UNKNOWN_UPDATED_AT

    def _path(self, form_id: str) -> Path:
        return self.directory / f"{form_id}.json"

