"""Prompt Builder - Phrases the question generation request."""

from quizform.models.quiz import DEFAULT_LANGUAGE, DEFAULT_QUESTION_COUNT, REFERENCE_MIN_LENGTH

JSON_ONLY_INSTRUCTION = "請直接回傳 JSON Array，不要 Markdown，不要前言後語。"
OUTPUT_EXAMPLE = (
    '[{"question":"...","options":["...","...","...","..."],'
    '"answerIndex":0,"explanation":"...","points":1}]'
)

RESTRICTED_MODE_HEADER = "你現在是一個「嚴格的閱讀測驗出題機器」。"
OPEN_MODE_HEADER = "你是一個專業教師。"


def build_prompt(
    topic: str | None,
    question_count: int | None = None,
    reference_text: str | None = None,
    *,
    min_reference_length: int = REFERENCE_MIN_LENGTH,
    language: str = DEFAULT_LANGUAGE,
) -> str:
    """
    Build the generation instruction for a quiz.

    Reference text longer than ``min_reference_length`` switches to restricted
    mode, where the model may only use that text; otherwise the model writes
    freely about the topic. Both modes end with the same output contract.

    Args:
        topic: Topic or keyword; a soft filter in restricted mode
        question_count: Number of questions, defaults to 5 when absent or non-positive
        reference_text: Extracted document text, if any
        min_reference_length: Reference text must be longer than this to restrict
        language: Language the questions must be written in

    Returns:
        Prompt text
    """
    count = question_count if question_count and question_count > 0 else DEFAULT_QUESTION_COUNT

    if is_restricted_mode(reference_text, min_reference_length):
        instructions = restricted_instructions(topic, count, reference_text)
    else:
        instructions = open_instructions(topic, count)

    return f"""{instructions}

【嚴格回傳格式 (JSON Only)】：
1. {JSON_ONLY_INSTRUCTION}
2. 語言：{language}。
3. 每題必須包含欄位 question、options (恰好 4 個選項)、answerIndex (0-3)、explanation、points。
4. 結構範例：{OUTPUT_EXAMPLE}
"""


def is_restricted_mode(
    reference_text: str | None, min_reference_length: int = REFERENCE_MIN_LENGTH
) -> bool:
    """Restricted mode needs reference text strictly longer than the minimum."""
    return bool(reference_text) and len(reference_text) > min_reference_length


def restricted_instructions(topic: str | None, count: int, reference_text: str) -> str:
    """Instructions that confine generation to the supplied text."""
    return f"""{RESTRICTED_MODE_HEADER}

【任務目標】：
請根據下方【指定文章】，出一份 {count} 題的單選題。

【指定文章內容】：
\"\"\"
{reference_text}
\"\"\"

【出題鐵律 (必須遵守)】：
1. 絕對禁止使用任何文章以外的外部知識。即使你知道更多背景，也不准寫出來。
2. 題目必須只能從文章裡的資訊找到答案。
3. 如果使用者有提供主題關鍵字：「{topic or '無'}」，請優先出與該關鍵字相關的段落；但如果文章裡沒提到該關鍵字，請忽略關鍵字，直接針對文章重點出題。
4. 選項 (Options) 必須包含一個正確答案和三個錯誤答案。"""


def open_instructions(topic: str | None, count: int) -> str:
    """Instructions for free generation from domain knowledge."""
    return f"{OPEN_MODE_HEADER}請根據主題「{topic or '綜合常識'}」運用你的專業知識，出 {count} 題單選題。"
