"""Test data and stand-ins shared by several test modules."""

import json
from typing import Any
from unittest.mock import MagicMock

REFERENCE_TEXT = (
    "光合作用是植物利用光能，把二氧化碳和水轉換成葡萄糖並釋放氧氣的過程。"
    "這個過程主要發生在葉綠體中，葉綠素負責吸收光能。"
)


def make_response(
    status_code: int = 200,
    body: Any = None,
    text: str | None = None,
) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if body is not None:
        response.json.return_value = body
        response.text = json.dumps(body, ensure_ascii=False)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    return response


def candidate_envelope(text: str) -> dict[str, Any]:
    """A successful generateContent body carrying the given text."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}
