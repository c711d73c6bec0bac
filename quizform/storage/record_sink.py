"""Append-only record tables for grading analytics and the quiz list."""

import csv
from datetime import datetime
from pathlib import Path
from typing import Protocol

from quizform.models.quiz import SubmissionResponse, SummaryRecord, WrongAnswerRecord

DATE_FORMAT = "%Y/%m/%d %H:%M"

WRONG_ANSWER_HEADER = ["回答時間", "學生信箱", "試卷名稱", "題號", "題目文字", "學生答案", "正確答案", "解析"]
SUMMARY_HEADER = ["測驗卷建立時間", "測驗時間", "題數", "科目別", "答對率", "答錯率", "未答率"]
QUIZ_LIST_HEADER = ["試卷名稱", "Form 連結", "建立時間", "Form ID"]


class RecordSink(Protocol):
    """Receives the records emitted by grading and publishing."""

    def write_wrong_answers(
        self, submission: SubmissionResponse, records: list[WrongAnswerRecord]
    ) -> None: ...

    def write_summary(self, summary: SummaryRecord) -> None: ...

    def register_quiz(self, title: str, url: str, created_at: datetime, form_id: str) -> None: ...


class CsvRecordSink:
    """One CSV file per table; headers are written only into empty files."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.wrong_answers_path = self.directory / "wrong_answers.csv"
        self.summary_path = self.directory / "quiz_records.csv"
        self.quiz_list_path = self.directory / "quiz_list.csv"

    def write_wrong_answers(
        self, submission: SubmissionResponse, records: list[WrongAnswerRecord]
    ) -> None:
        rows = [
            [
                submission.timestamp.strftime(DATE_FORMAT),
                submission.respondent_id or "",
                submission.quiz_title,
                record.position if record.position is not None else "",
                record.question_text,
                record.student_answer,
                record.correct_answer,
                record.explanation,
            ]
            for record in records
        ]
        self._append(self.wrong_answers_path, WRONG_ANSWER_HEADER, rows)

    def write_summary(self, summary: SummaryRecord) -> None:
        row = [
            summary.quiz_updated_at,
            summary.graded_at.strftime(DATE_FORMAT),
            summary.total_graded,
            summary.quiz_title,
            summary.correct_rate,
            summary.wrong_rate,
            summary.blank_rate,
        ]
        self._append(self.summary_path, SUMMARY_HEADER, [row])

    def register_quiz(self, title: str, url: str, created_at: datetime, form_id: str) -> None:
        row = [title, url, created_at.strftime(DATE_FORMAT), form_id]
        self._append(self.quiz_list_path, QUIZ_LIST_HEADER, [row])

    def _append(self, path: Path, header: list[str], rows: list[list]) -> None:
        if not rows:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        is_empty = not path.exists() or path.stat().st_size == 0
        with path.open("a", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            if is_empty:
                writer.writerow(header)
            writer.writerows(rows)


def read_rows(path: str | Path) -> list[list[str]]:
    """Read a record table back, header included."""
    path = Path(path)
    if not path.exists():
        return []
    with path.open(encoding="utf-8", newline="") as f:
        return list(csv.reader(f))
