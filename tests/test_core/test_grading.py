"""Tests for the grading engine."""

from datetime import datetime

import pytest

from quizform.core.answer_key import build_answer_key
from quizform.core.grading import SKIP_SENTINEL, ItemOutcome, classify, grade, summarize
from quizform.models.quiz import AnswerKey, AnswerKeyEntry, SubmissionResponse


def entry(item_id: str, correct: str) -> AnswerKeyEntry:
    return AnswerKeyEntry(
        item_id=item_id,
        question_text=f"{item_id}. Question",
        correct_answer_text=correct,
        explanation=f"Because {correct}",
    )


@pytest.fixture
def five_item_key() -> AnswerKey:
    entries = [entry(f"q{i}", f"right-{i}") for i in range(1, 6)]
    return AnswerKey(quiz_id="quiz", entries={e.item_id: e for e in entries})


def submission(answers: dict, **kwargs) -> SubmissionResponse:
    return SubmissionResponse(quiz_id="quiz", quiz_title="生物小考", item_answers=answers, **kwargs)


class TestClassify:
    """Test single-answer classification."""

    def test_correct(self):
        assert classify("葉綠體", "葉綠體") is ItemOutcome.CORRECT

    def test_incorrect(self):
        assert classify("粒線體", "葉綠體") is ItemOutcome.INCORRECT

    @pytest.mark.parametrize("answer", [None, ""])
    def test_empty_is_blank(self, answer):
        assert classify(answer, "葉綠體") is ItemOutcome.BLANK

    def test_sentinel_is_blank(self):
        assert classify(SKIP_SENTINEL, "葉綠體") is ItemOutcome.BLANK

    def test_sentinel_is_blank_even_when_it_is_the_correct_answer(self):
        assert classify(SKIP_SENTINEL, SKIP_SENTINEL) is ItemOutcome.BLANK

    def test_custom_sentinel(self):
        assert classify("I don't know", "Paris", skip_sentinel="I don't know") is ItemOutcome.BLANK
        assert classify(SKIP_SENTINEL, "Paris", skip_sentinel="I don't know") is ItemOutcome.INCORRECT

    def test_comparison_is_literal(self):
        """Whitespace and case differences are not normalized away."""
        assert classify("葉綠體 ", "葉綠體") is ItemOutcome.INCORRECT
        assert classify("paris", "Paris") is ItemOutcome.INCORRECT
        assert classify("Paris.", "Paris") is ItemOutcome.INCORRECT


class TestGrade:
    """Test grading whole submissions."""

    def test_three_correct_one_wrong_one_blank(self, five_item_key):
        result = grade(
            five_item_key,
            submission(
                {
                    "q1": "right-1",
                    "q2": "right-2",
                    "q3": "right-3",
                    "q4": "wrong",
                    "q5": SKIP_SENTINEL,
                }
            ),
        )

        assert result.total_graded == 5
        assert (result.correct_count, result.wrong_count, result.blank_count) == (3, 1, 1)
        assert (result.correct_rate, result.wrong_rate, result.blank_rate) == ("60%", "20%", "20%")
        assert len(result.wrong_records) == 1

    def test_wrong_record_contents(self, five_item_key):
        result = grade(
            five_item_key,
            submission({"q4": "wrong"}, item_positions={"q4": 5}),
        )

        record = result.wrong_records[0]
        assert record.item_id == "q4"
        assert record.position == 5
        assert record.question_text == "q4. Question"
        assert record.student_answer == "wrong"
        assert record.correct_answer == "right-4"
        assert record.explanation == "Because right-4"

    def test_items_without_key_entry_are_skipped(self, five_item_key):
        result = grade(
            five_item_key,
            submission({"q1": "right-1", "paragraph": "some text", "new-item": "x"}),
        )

        assert result.items_seen == 3
        assert result.total_graded == 1
        assert result.correct_rate == "100%"
        assert result.wrong_records == []

    def test_missing_answer_key_grades_nothing(self):
        result = grade(None, submission({"q1": "anything"}))

        assert result.items_seen == 1
        assert result.total_graded == 0
        assert (result.correct_rate, result.wrong_rate, result.blank_rate) == ("0%", "0%", "0%")

    def test_counts_always_add_up(self, five_item_key):
        sub = submission({"q1": "", "q2": None, "q3": "right-3", "q4": "nope", "zzz": "x"})
        result = grade(five_item_key, sub)

        assert result.correct_count + result.wrong_count + result.blank_count == result.total_graded
        assert result.total_graded <= len(sub.item_answers)
        assert result.total_graded == 4
        assert result.blank_count == 2

    def test_wrong_records_follow_delivery_order(self, five_item_key):
        result = grade(five_item_key, submission({"q5": "a", "q2": "b", "q3": "c"}))

        assert [r.item_id for r in result.wrong_records] == ["q5", "q2", "q3"]
        assert result.wrong_rate == "100%"

    def test_rates_round_to_nearest_percent(self):
        entries = {f"q{i}": entry(f"q{i}", "A") for i in range(3)}
        answer_key = AnswerKey(quiz_id="quiz", entries=entries)

        result = grade(answer_key, submission({"q0": "A", "q1": "B", "q2": "B"}))

        assert (result.correct_rate, result.wrong_rate) == ("33%", "67%")

    def test_round_trip_with_correct_answers(self, sample_questions, item_ids):
        """Echoing every correct answer scores 100%."""
        answer_key, items = build_answer_key("quiz", sample_questions, item_ids)
        answers = {item.item_id: item.correct_choice for item in items}

        result = grade(answer_key, submission(answers))

        assert result.total_graded == 3
        assert (result.correct_rate, result.wrong_rate, result.blank_rate) == ("100%", "0%", "0%")

    def test_ai_whitespace_mismatch_is_wrong(self):
        """A trailing space echoed by the form host does not match the key."""
        entries = {"q": entry("q", "葉綠體")}
        result = grade(AnswerKey(quiz_id="quiz", entries=entries), submission({"q": "葉綠體 "}))

        assert result.wrong_count == 1


class TestSummarize:
    """Test the summary record."""

    def test_summary_fields(self, five_item_key):
        sub = submission({"q1": "right-1", "q2": "x"})
        result = grade(five_item_key, sub)
        graded_at = datetime(2026, 10, 19, 9, 30)

        summary = summarize(result, sub, "2026/10/18 20:00", graded_at)

        assert summary.quiz_updated_at == "2026/10/18 20:00"
        assert summary.graded_at == graded_at
        assert summary.total_graded == 2
        assert summary.quiz_title == "生物小考"
        assert (summary.correct_rate, summary.wrong_rate, summary.blank_rate) == ("50%", "50%", "0%")
