"""Tests for answer-key stores."""

import json

import pytest

from quizform.errors import AnswerKeyNotFoundError
from quizform.models.quiz import AnswerKey, AnswerKeyEntry
from quizform.storage.answer_key_store import (
    InMemoryAnswerKeyStore,
    JsonAnswerKeyStore,
    load_answer_key,
)


def make_key(quiz_id: str, *item_ids: str) -> AnswerKey:
    entries = {
        item_id: AnswerKeyEntry(
            item_id=item_id,
            question_text=f"{n}. 題目 {item_id}",
            correct_answer_text=f"答案 {item_id}",
            explanation="解析" if n % 2 else "",
        )
        for n, item_id in enumerate(item_ids, start=1)
    }
    return AnswerKey(quiz_id=quiz_id, entries=entries)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryAnswerKeyStore()
    return JsonAnswerKeyStore(tmp_path / "keys" / "answer_keys.json")


class TestAnswerKeyStores:
    """Behaviour shared by every store."""

    def test_missing_quiz_returns_none(self, store):
        assert store.get("nope") is None

    def test_load_answer_key_raises_for_missing_quiz(self, store):
        with pytest.raises(AnswerKeyNotFoundError):
            load_answer_key(store, "nope")

    def test_replace_then_get(self, store):
        answer_key = make_key("quiz", "a", "b")
        store.replace(answer_key)

        assert store.get("quiz") == answer_key
        assert load_answer_key(store, "quiz") == answer_key

    def test_replace_discards_previous_entries(self, store):
        store.replace(make_key("quiz", "a", "b"))
        store.replace(make_key("quiz", "c"))

        stored = store.get("quiz")
        assert list(stored.entries) == ["c"]
        assert stored.get("a") is None

    def test_keys_are_kept_per_quiz(self, store):
        store.replace(make_key("one", "a"))
        store.replace(make_key("two", "b", "c"))

        assert len(store.get("one")) == 1
        assert len(store.get("two")) == 2

    def test_delete(self, store):
        store.replace(make_key("quiz", "a"))
        store.delete("quiz")
        store.delete("never-existed")

        assert store.get("quiz") is None

    def test_entry_order_is_preserved(self, store):
        store.replace(make_key("quiz", "z", "a", "m"))

        assert list(store.get("quiz").entries) == ["z", "a", "m"]


class TestInMemoryAnswerKeyStore:
    def test_returned_keys_are_copies(self):
        store = InMemoryAnswerKeyStore()
        store.replace(make_key("quiz", "a"))

        store.get("quiz").entries.clear()

        assert len(store.get("quiz")) == 1


class TestJsonAnswerKeyStore:
    """Test the JSON document layout."""

    def test_document_layout(self, tmp_path):
        path = tmp_path / "answer_keys.json"
        JsonAnswerKeyStore(path).replace(make_key("form123", "item-1"))

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document == {
            "map_form123": {"item-1": {"q": "1. 題目 item-1", "a": "答案 item-1", "exp": "解析"}}
        }

    def test_survives_reopening(self, tmp_path):
        path = tmp_path / "answer_keys.json"
        JsonAnswerKeyStore(path).replace(make_key("quiz", "a"))

        assert JsonAnswerKeyStore(path).get("quiz") == make_key("quiz", "a")

    def test_no_temp_files_left_behind(self, tmp_path):
        path = tmp_path / "answer_keys.json"
        store = JsonAnswerKeyStore(path)
        store.replace(make_key("quiz", "a"))
        store.replace(make_key("quiz", "b"))

        assert [p.name for p in tmp_path.iterdir()] == ["answer_keys.json"]
