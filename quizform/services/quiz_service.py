"""Publishing generated quizzes and handling their submissions."""

import logging
from datetime import datetime

from quizform.core.grading import SKIP_SENTINEL, grade, summarize
from quizform.forms.local_host import LocalFormHost
from quizform.models.quiz import (
    GeneratedQuestion,
    GradingResult,
    PublishResult,
    SubmissionResponse,
)
from quizform.storage.answer_key_store import AnswerKeyStore
from quizform.storage.record_sink import RecordSink

logger = logging.getLogger(__name__)


def create_quiz(
    host: LocalFormHost,
    store: AnswerKeyStore,
    sink: RecordSink,
    questions: list[GeneratedQuestion],
    title: str | None = None,
    skip_choice: str | None = None,
) -> PublishResult:
    """Publish questions as a new form and register it in the quiz list."""
    form = host.create_form(title)
    answer_key = host.rebuild_items(form, questions, store=store, skip_choice=skip_choice)
    logger.info("Quiz %s holds %d of %d submitted questions", form.form_id, len(answer_key), len(questions))
    url = host.url(form)
    sink.register_quiz(form.title, url, form.created_at, form.form_id)
    return PublishResult(
        form_id=form.form_id,
        url=url,
        updated_at=host.updated_at(form),
        total_questions=len(questions),
    )


def update_fixed_quiz(
    host: LocalFormHost,
    store: AnswerKeyStore,
    questions: list[GeneratedQuestion],
    form_id: str,
    skip_choice: str | None = None,
) -> PublishResult:
    """Replace the items of an existing form; its old answer key is discarded."""
    form = host.open_form(form_id)
    answer_key = host.rebuild_items(form, questions, store=store, skip_choice=skip_choice)
    logger.info("Quiz %s holds %d of %d submitted questions", form.form_id, len(answer_key), len(questions))
    return PublishResult(
        form_id=form.form_id,
        url=host.url(form),
        updated_at=host.updated_at(form),
        total_questions=len(questions),
    )


def handle_submission(
    host: LocalFormHost,
    store: AnswerKeyStore,
    sink: RecordSink,
    submission: SubmissionResponse,
    skip_sentinel: str = SKIP_SENTINEL,
    graded_at: datetime | None = None,
) -> GradingResult:
    """
    Grade one submission and write its records.

    A quiz without a stored answer key grades nothing; the summary row is
    still written with 0% rates.
    """
    answer_key = store.get(submission.quiz_id)
    if answer_key is None:
        logger.warning("No answer key for quiz %s; nothing will be graded", submission.quiz_id)

    result = grade(answer_key, submission, skip_sentinel)
    sink.write_wrong_answers(submission, result.wrong_records)

    form = host.open_form(submission.quiz_id)
    summary = summarize(result, submission, host.updated_at(form), graded_at)
    sink.write_summary(summary)
    return result
