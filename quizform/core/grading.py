"""Grading Engine - Classifies submitted answers against a stored answer key."""

import logging
from datetime import datetime
from enum import Enum

from quizform.models.quiz import (
    AnswerKey,
    GradingResult,
    SubmissionResponse,
    SummaryRecord,
    WrongAnswerRecord,
)

logger = logging.getLogger(__name__)

SKIP_SENTINEL = "這題我不會"


class ItemOutcome(str, Enum):
    """Terminal classification of one item response."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    BLANK = "blank"


def classify(answer: str | None, correct_answer: str, skip_sentinel: str = SKIP_SENTINEL) -> ItemOutcome:
    """
    Classify one answer.

    Empty answers and the skip sentinel are blank, even when the sentinel
    happens to equal the correct answer. Otherwise the comparison is exact
    string equality with no whitespace or case normalization.
    """
    if not answer or answer == skip_sentinel:
        return ItemOutcome.BLANK
    if answer == correct_answer:
        return ItemOutcome.CORRECT
    return ItemOutcome.INCORRECT


def grade(
    answer_key: AnswerKey | None,
    submission: SubmissionResponse,
    skip_sentinel: str = SKIP_SENTINEL,
) -> GradingResult:
    """
    Grade a submission.

    Items without an answer-key entry are counted as seen but not graded,
    so they never affect any rate.

    Args:
        answer_key: Answer key for the submission's quiz, or None if missing
        submission: Submitted answers in the order the host delivered them
        skip_sentinel: Reserved "I don't know" answer

    Returns:
        GradingResult with counts and one record per incorrect item
    """
    entries = answer_key.entries if answer_key is not None else {}
    items_seen = correct = wrong = blank = 0
    wrong_records: list[WrongAnswerRecord] = []

    for item_id, answer in submission.item_answers.items():
        items_seen += 1
        entry = entries.get(item_id)
        if entry is None:
            continue

        outcome = classify(answer, entry.correct_answer_text, skip_sentinel)
        if outcome is ItemOutcome.BLANK:
            blank += 1
        elif outcome is ItemOutcome.CORRECT:
            correct += 1
        else:
            wrong += 1
            wrong_records.append(
                WrongAnswerRecord(
                    item_id=item_id,
                    position=submission.item_positions.get(item_id),
                    question_text=entry.question_text,
                    student_answer=answer,
                    correct_answer=entry.correct_answer_text,
                    explanation=entry.explanation,
                )
            )

    result = GradingResult(
        items_seen=items_seen,
        total_graded=correct + wrong + blank,
        correct_count=correct,
        wrong_count=wrong,
        blank_count=blank,
        wrong_records=wrong_records,
    )
    logger.info(
        "Graded quiz %s: %d graded of %d seen, %s correct, %s wrong, %s blank",
        submission.quiz_id,
        result.total_graded,
        result.items_seen,
        result.correct_rate,
        result.wrong_rate,
        result.blank_rate,
    )
    return result


def summarize(
    result: GradingResult,
    submission: SubmissionResponse,
    quiz_updated_at: str,
    graded_at: datetime | None = None,
) -> SummaryRecord:
    """Build the statistics record for a graded submission."""
    return SummaryRecord(
        quiz_updated_at=quiz_updated_at,
        graded_at=graded_at or datetime.now(),
        total_graded=result.total_graded,
        quiz_title=submission.quiz_title,
        correct_rate=result.correct_rate,
        wrong_rate=result.wrong_rate,
        blank_rate=result.blank_rate,
    )
