"""Answer Key Builder - Maps generated questions to form items and their correct answers."""

import logging
from collections.abc import Callable

from quizform.core.content_policy import QuestionPolicy, exclude_email_questions
from quizform.models.quiz import (
    AnswerKey,
    AnswerKeyEntry,
    FormItemDefinition,
    GeneratedQuestion,
)
from quizform.storage.answer_key_store import AnswerKeyStore

logger = logging.getLogger(__name__)

# Issues an opaque, host-assigned id for each new form item
ItemIdAssigner = Callable[[], str]

CORRECT_FEEDBACK_PREFIX = "✔ 正確！\n"
INCORRECT_FEEDBACK_PREFIX = "✘ 錯誤：\n"


def build_answer_key(
    quiz_id: str,
    questions: list[GeneratedQuestion],
    assign_item_id: ItemIdAssigner,
    *,
    policy: QuestionPolicy = exclude_email_questions,
    skip_choice: str | None = None,
    store: AnswerKeyStore | None = None,
) -> tuple[AnswerKey, list[FormItemDefinition]]:
    """
    Build the answer key and item definitions for a quiz.

    Questions rejected by ``policy`` are dropped. The remaining ones are
    numbered from 1 in their original order. When a store is given, the
    quiz's previous answer key is replaced wholesale.

    Args:
        quiz_id: Quiz (form) identifier the key belongs to
        questions: Validated generated questions
        assign_item_id: Host collaborator issuing item ids
        policy: Content policy deciding which questions are kept
        skip_choice: Extra "I don't know" choice appended to every item
        store: Optional persistence collaborator

    Returns:
        Tuple of (answer key, item definitions in display order)
    """
    kept = [q for q in questions if policy(q)]
    if len(kept) != len(questions):
        logger.info("Content policy dropped %d question(s)", len(questions) - len(kept))

    entries: dict[str, AnswerKeyEntry] = {}
    items: list[FormItemDefinition] = []

    for number, question in enumerate(kept, start=1):
        item_id = str(assign_item_id())
        if item_id in entries:
            raise ValueError(f"Item id {item_id!r} was issued twice")

        display_text = f"{number}. {question.question_text}"
        entries[item_id] = AnswerKeyEntry(
            item_id=item_id,
            question_text=display_text,
            correct_answer_text=question.correct_option,
            explanation=question.explanation,
        )
        items.append(create_item_definition(item_id, display_text, question, skip_choice))

    answer_key = AnswerKey(quiz_id=quiz_id, entries=entries)
    if store is not None:
        store.replace(answer_key)
        logger.info("Replaced answer key for quiz %s (%d entries)", quiz_id, len(answer_key))
    return answer_key, items


def create_item_definition(
    item_id: str,
    display_text: str,
    question: GeneratedQuestion,
    skip_choice: str | None = None,
) -> FormItemDefinition:
    """Describe one multiple-choice item for the form host."""
    choices = list(question.options)
    if skip_choice and skip_choice not in choices:
        choices.append(skip_choice)

    feedback_correct = feedback_incorrect = None
    if question.explanation:
        feedback_correct = CORRECT_FEEDBACK_PREFIX + question.explanation
        feedback_incorrect = INCORRECT_FEEDBACK_PREFIX + question.explanation

    return FormItemDefinition(
        item_id=item_id,
        title=display_text,
        choices=choices,
        correct_choice=question.correct_option,
        points=question.points,
        feedback_correct=feedback_correct,
        feedback_incorrect=feedback_incorrect,
    )
