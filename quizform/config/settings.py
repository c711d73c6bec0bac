"""Application settings and configuration."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from quizform.models.quiz import DEFAULT_LANGUAGE, DEFAULT_QUESTION_COUNT, REFERENCE_MIN_LENGTH

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini endpoint
    gemini_api_key: str | None = Field(
        default=None,
        description="API key for the generative language endpoint",
        validation_alias="GEMINI_API_KEY",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for question generation",
        validation_alias="GEMINI_MODEL",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generative language REST API",
        validation_alias="GEMINI_BASE_URL",
    )
    request_timeout: float | None = Field(
        default=None,
        gt=0.0,
        description="Optional timeout in seconds for the generation call",
        validation_alias="REQUEST_TIMEOUT",
    )

    # Generation Settings
    default_question_count: int = Field(
        default=DEFAULT_QUESTION_COUNT,
        ge=1,
        le=50,
        description="Question count used when none is requested",
        validation_alias="DEFAULT_QUESTION_COUNT",
    )
    reference_min_length: int = Field(
        default=REFERENCE_MIN_LENGTH,
        ge=0,
        description="Reference text must be longer than this to restrict generation to it",
        validation_alias="REFERENCE_MIN_LENGTH",
    )
    output_language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Language the questions are written in",
        validation_alias="OUTPUT_LANGUAGE",
    )

    # Grading Settings
    skip_sentinel: str = Field(
        default="這題我不會",
        min_length=1,
        description='Reserved "I don\'t know" choice, always graded as blank',
        validation_alias="SKIP_SENTINEL",
    )
    add_skip_choice: bool = Field(
        default=True,
        description="Append the skip sentinel as an extra choice on every question",
        validation_alias="ADD_SKIP_CHOICE",
    )

    # Storage Settings
    data_dir: str = Field(
        default=".quizform",
        description="Directory holding forms, answer keys and records",
        validation_alias="QUIZFORM_DATA_DIR",
    )
    document_dir: str = Field(
        default="documents",
        description="Directory searched when a reference is given as a document id",
        validation_alias="DOCUMENT_DIR",
    )
    fixed_quiz_id: str | None = Field(
        default=None,
        description="Form that `publish` updates when no title or form id is given",
        validation_alias="FIXED_QUIZ_ID",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
        validation_alias="LOG_LEVEL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# This is loaded the first time and then cached for the CLI and workflow
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
