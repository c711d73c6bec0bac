"""Tests for the prompt builder."""

import pytest

from helpers import REFERENCE_TEXT
from quizform.core.prompt_builder import (
    JSON_ONLY_INSTRUCTION,
    OPEN_MODE_HEADER,
    RESTRICTED_MODE_HEADER,
    build_prompt,
    is_restricted_mode,
)


class TestModeSelection:
    """Test restricted vs open mode selection."""

    def test_no_reference_uses_open_mode(self):
        prompt = build_prompt("光合作用", 3)

        assert OPEN_MODE_HEADER in prompt
        assert RESTRICTED_MODE_HEADER not in prompt
        assert "光合作用" in prompt
        assert "3 題" in prompt

    def test_exactly_fifty_chars_uses_open_mode(self):
        """Test the boundary: restricted mode needs strictly more than 50 characters."""
        reference = "字" * 50
        prompt = build_prompt("光合作用", 3, reference)

        assert OPEN_MODE_HEADER in prompt
        assert reference not in prompt

    def test_fifty_one_chars_uses_restricted_mode(self):
        reference = "字" * 51
        prompt = build_prompt("光合作用", 3, reference)

        assert RESTRICTED_MODE_HEADER in prompt
        assert reference in prompt

    @pytest.mark.parametrize(
        ("length", "expected"),
        [(0, False), (10, False), (50, False), (51, True), (500, True)],
    )
    def test_is_restricted_mode(self, length, expected):
        assert is_restricted_mode("a" * length) is expected

    def test_custom_threshold(self):
        assert is_restricted_mode("a" * 11, min_reference_length=10)
        assert OPEN_MODE_HEADER in build_prompt("t", 1, "a" * 60, min_reference_length=100)


class TestRestrictedInstructions:
    """Test the restricted-mode rules."""

    def test_contains_reference_and_rules(self):
        prompt = build_prompt("葉綠體", 4, REFERENCE_TEXT)

        assert REFERENCE_TEXT in prompt
        assert "絕對禁止使用任何文章以外的外部知識" in prompt
        assert "題目必須只能從文章裡的資訊找到答案" in prompt
        assert "「葉綠體」" in prompt
        assert "忽略關鍵字" in prompt
        assert "一個正確答案和三個錯誤答案" in prompt
        assert "4 題" in prompt

    def test_missing_topic_is_marked_none(self):
        prompt = build_prompt("", 4, REFERENCE_TEXT)

        assert "「無」" in prompt


class TestOutputContract:
    """Test the output format contract shared by both modes."""

    @pytest.mark.parametrize("reference", [None, "", "短文", REFERENCE_TEXT])
    def test_json_only_instruction_always_present(self, reference):
        prompt = build_prompt("光合作用", 5, reference)

        assert JSON_ONLY_INSTRUCTION in prompt
        for field in ("question", "options", "answerIndex", "explanation", "points"):
            assert field in prompt

    def test_language_is_included(self):
        prompt = build_prompt("Photosynthesis", 2, language="English")

        assert "語言：English" in prompt

    def test_default_language(self):
        assert "繁體中文 (台灣用語)" in build_prompt("光合作用", 2)

    @pytest.mark.parametrize("count", [None, 0, -1])
    def test_non_positive_count_defaults_to_five(self, count):
        assert "5 題" in build_prompt("光合作用", count)

    def test_pure_function(self):
        assert build_prompt("光合作用", 3, REFERENCE_TEXT) == build_prompt("光合作用", 3, REFERENCE_TEXT)
