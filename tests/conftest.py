"""Shared test fixtures and configuration for pytest."""

from itertools import count
from typing import Any
from unittest.mock import MagicMock

import pytest

from quizform.core.generation_client import EndpointConfig, GenerationClient
from quizform.forms.local_host import LocalFormHost
from quizform.models.quiz import GeneratedQuestion
from quizform.storage.answer_key_store import InMemoryAnswerKeyStore
from quizform.storage.record_sink import CsvRecordSink


@pytest.fixture
def wire_questions() -> list[dict[str, Any]]:
    """Three questions in the generation wire format."""
    return [
        {
            "question": "光合作用主要在哪個胞器中進行？",
            "options": ["粒線體", "葉綠體", "細胞核", "高基氏體"],
            "answerIndex": 1,
            "explanation": "葉綠體含有葉綠素。",
            "points": 1,
        },
        {
            "question": "光合作用會釋放哪一種氣體？",
            "options": ["氧氣", "氮氣", "二氧化碳", "氫氣"],
            "answerIndex": 0,
            "explanation": "水分子分解後釋放氧氣。",
            "points": 2,
        },
        {
            "question": "哪一種色素負責吸收光能？",
            "options": ["血紅素", "黑色素", "葉綠素", "胡蘿蔔素"],
            "answerIndex": 2,
            "explanation": "",
            "points": 1,
        },
    ]


@pytest.fixture
def sample_questions(wire_questions: list[dict[str, Any]]) -> list[GeneratedQuestion]:
    """The wire questions validated into models."""
    return [GeneratedQuestion.model_validate(q) for q in wire_questions]


@pytest.fixture
def item_ids():
    """Deterministic item id assigner: item-1, item-2, ..."""
    counter = count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture
def endpoint() -> EndpointConfig:
    return EndpointConfig(api_key="test-key", model="gemini-2.5-flash")


@pytest.fixture
def mock_session() -> MagicMock:
    """A requests.Session stand-in; set ``post.return_value`` per test."""
    return MagicMock()


@pytest.fixture
def client(endpoint: EndpointConfig, mock_session: MagicMock) -> GenerationClient:
    return GenerationClient(endpoint, session=mock_session)


@pytest.fixture
def memory_store() -> InMemoryAnswerKeyStore:
    return InMemoryAnswerKeyStore()


@pytest.fixture
def form_host(tmp_path) -> LocalFormHost:
    return LocalFormHost(tmp_path / "forms")


@pytest.fixture
def record_sink(tmp_path) -> CsvRecordSink:
    return CsvRecordSink(tmp_path / "records")
