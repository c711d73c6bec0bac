"""Persistence for answer keys and grading records."""

from .answer_key_store import (
    AnswerKeyStore,
    InMemoryAnswerKeyStore,
    JsonAnswerKeyStore,
    load_answer_key,
)
from .record_sink import CsvRecordSink, RecordSink, read_rows

__all__ = [
    "AnswerKeyStore",
    "InMemoryAnswerKeyStore",
    "JsonAnswerKeyStore",
    "load_answer_key",
    "RecordSink",
    "CsvRecordSink",
    "read_rows",
]
