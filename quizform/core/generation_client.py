"""Generation Client - Sends prompts to the Gemini REST endpoint and validates the reply."""

import json
import logging
import re
from typing import Any

import requests
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from quizform.config.settings import Settings
from quizform.errors import GenerationError, GenerationErrorKind, QuestionValidationError
from quizform.models.quiz import GeneratedQuestion

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)

# Finish reasons for a candidate that ran to completion; any other reason means
# the reply was withheld (SAFETY, RECITATION, BLOCKLIST, PROHIBITED_CONTENT, ...).
COMPLETED_FINISH_REASONS = frozenset({"STOP", "MAX_TOKENS", "FINISH_REASON_UNSPECIFIED"})


class EndpointConfig(BaseModel):
    """Where and how to reach the generation endpoint."""

    api_key: str = Field(..., min_length=1)
    model: str = Field(default="gemini-2.5-flash", min_length=1)
    base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    timeout: float | None = Field(default=None, gt=0.0)

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_settings(cls, settings: Settings) -> "EndpointConfig":
        if not settings.gemini_api_key:
            raise GenerationError(GenerationErrorKind.TRANSPORT, "GEMINI_API_KEY is not set")
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.request_timeout,
        )


class GenerationClient:
    """
    One synchronous round trip to the generation endpoint per call.

    No retries are attempted; every failure surfaces as a GenerationError
    (or QuestionValidationError for well-formed JSON with bad questions).
    """

    def __init__(self, endpoint: EndpointConfig, session: requests.Session | None = None):
        self.endpoint = endpoint
        self.session = session or requests.Session()

    def generate(self, prompt: str) -> list[GeneratedQuestion]:
        """Generate and validate a question list for the prompt."""
        return parse_questions(self.generate_raw(prompt))

    def generate_raw(self, prompt: str) -> str:
        """
        Return the model's JSON text with code fences removed.

        Raises:
            GenerationError: transport failure, blocked output, or non-JSON output
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self.session.post(
                self.endpoint.url,
                params={"key": self.endpoint.api_key},
                json=payload,
                timeout=self.endpoint.timeout,
            )
        except requests.RequestException as e:
            logger.error("Generation request failed: %s", e)
            raise GenerationError(GenerationErrorKind.TRANSPORT, str(e)) from e

        logger.info("Generation endpoint responded %s", response.status_code)
        if response.status_code != 200:
            raise GenerationError(
                GenerationErrorKind.TRANSPORT, f"{response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT, "Response body is not JSON"
            ) from e

        raw_text = extract_candidate_text(data)
        cleaned = strip_code_fences(raw_text)
        try:
            json.loads(cleaned)
        except ValueError as e:
            logger.error("Model output is not valid JSON: %.200s", cleaned)
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT, "Model output is not valid JSON"
            ) from e
        return cleaned


def extract_candidate_text(data: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response envelope."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates:
        feedback = data.get("promptFeedback") if isinstance(data, dict) else None
        reason = (feedback or {}).get("blockReason") or "unknown"
        logger.warning("Generation returned no candidates (%s)", reason)
        raise GenerationError(GenerationErrorKind.BLOCKED, reason)

    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        finish_reason = candidates[0].get("finishReason") if isinstance(candidates[0], dict) else None
        if finish_reason and finish_reason not in COMPLETED_FINISH_REASONS:
            logger.warning("Generation withheld the candidate (%s)", finish_reason)
            raise GenerationError(GenerationErrorKind.BLOCKED, finish_reason) from e
        raise GenerationError(
            GenerationErrorKind.MALFORMED_OUTPUT,
            f"Candidate has no text part (finishReason={finish_reason})",
        ) from e
    if not isinstance(text, str):
        raise GenerationError(GenerationErrorKind.MALFORMED_OUTPUT, "Candidate text is not a string")
    return text


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers wherever they appear."""
    return CODE_FENCE_PATTERN.sub("", text).strip()


def parse_questions(raw: str | list[Any]) -> list[GeneratedQuestion]:
    """
    Validate generated JSON into questions.

    Args:
        raw: JSON text or an already decoded list

    Returns:
        Questions in their original order

    Raises:
        GenerationError: the text is not JSON
        QuestionValidationError: not an array, or an element is malformed
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(strip_code_fences(raw))
        except ValueError as e:
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT, "Model output is not valid JSON"
            ) from e

    if not isinstance(raw, list):
        raise QuestionValidationError(f"Expected a JSON array, got {type(raw).__name__}")

    questions: list[GeneratedQuestion] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise QuestionValidationError("Question must be a JSON object", index=i)
        try:
            questions.append(GeneratedQuestion.model_validate(item))
        except PydanticValidationError as e:
            raise QuestionValidationError(_summarize(e), index=i) from e
    return questions


def _summarize(error: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'question'}: {err['msg']}"
        for err in error.errors()
    )
