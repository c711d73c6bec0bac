"""Answer-key persistence keyed by quiz identifier."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from quizform.errors import AnswerKeyNotFoundError
from quizform.models.quiz import AnswerKey, AnswerKeyEntry

logger = logging.getLogger(__name__)

KEY_PREFIX = "map_"


class AnswerKeyStore(Protocol):
    """Stores one answer key per quiz; replacing never merges."""

    def get(self, quiz_id: str) -> AnswerKey | None: ...

    def replace(self, answer_key: AnswerKey) -> None: ...

    def delete(self, quiz_id: str) -> None: ...


def load_answer_key(store: AnswerKeyStore, quiz_id: str) -> AnswerKey:
    """Fetch an answer key, raising if the quiz has none."""
    answer_key = store.get(quiz_id)
    if answer_key is None:
        raise AnswerKeyNotFoundError(f"No answer key stored for quiz {quiz_id}")
    return answer_key


class InMemoryAnswerKeyStore:
    """Dictionary-backed store, mainly for tests and one-shot runs."""

    def __init__(self) -> None:
        self._keys: dict[str, AnswerKey] = {}

    def get(self, quiz_id: str) -> AnswerKey | None:
        answer_key = self._keys.get(quiz_id)
        return answer_key.model_copy(deep=True) if answer_key is not None else None

    def replace(self, answer_key: AnswerKey) -> None:
        self._keys[answer_key.quiz_id] = answer_key.model_copy(deep=True)

    def delete(self, quiz_id: str) -> None:
        self._keys.pop(quiz_id, None)


class JsonAnswerKeyStore:
    """
    All answer keys in one JSON document, each under ``map_<quiz_id>``.

    Writes go to a temporary file that is then renamed over the document,
    so readers see either the old or the new mapping, never a mix.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self, quiz_id: str) -> AnswerKey | None:
        raw = self._read().get(KEY_PREFIX + quiz_id)
        if raw is None:
            return None
        entries = {
            item_id: AnswerKeyEntry(
                item_id=item_id,
                question_text=value["q"],
                correct_answer_text=value["a"],
                explanation=value.get("exp", ""),
            )
            for item_id, value in raw.items()
        }
        return AnswerKey(quiz_id=quiz_id, entries=entries)

    def replace(self, answer_key: AnswerKey) -> None:
        document = self._read()
        document[KEY_PREFIX + answer_key.quiz_id] = {
            item_id: {
                "q": entry.question_text,
                "a": entry.correct_answer_text,
                "exp": entry.explanation,
            }
            for item_id, entry in answer_key.entries.items()
        }
        self._write(document)

    def delete(self, quiz_id: str) -> None:
        document = self._read()
        if document.pop(KEY_PREFIX + quiz_id, None) is not None:
            self._write(document)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as f:
            return json.load(f)

    def _write(self, document: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".answer_keys-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote answer keys to %s", self.path)
