"""Process configuration.

Values come from the environment (and a `.env` file, when present) exactly once,
when `Settings()` is built at startup. Each field reads the upper-cased variable
of the same name (`max_array_len` <- `MAX_ARRAY_LEN`). The object is immutable
and is handed to the dispatcher and the AI gateway explicitly.
"""

from enum import Enum

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class AIProvider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    official_email: str = "YOUR CHITKARA EMAIL"

    max_array_len: int = Field(default=1000, gt=0)
    max_abs_value: int = Field(default=1_000_000, gt=0)
    max_fib_n: int = Field(default=10_000, ge=0)
    max_ai_question_len: int = Field(default=500, gt=0)

    ai_provider: AIProvider = AIProvider.GEMINI
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    # Upper bound for a single outbound provider call.
    ai_timeout_seconds: float = Field(default=10.0, gt=0)

    max_body_bytes: int = Field(default=64 * 1024, gt=0)
    port: int = Field(default=8080, gt=0, lt=65536)
    log_level: str = "INFO"

    @field_validator("ai_provider", mode="before")
    @classmethod
    def fallback_to_gemini(cls, value):
        """Anything other than `openai` selects gemini, case-insensitively."""
        if isinstance(value, AIProvider):
            return value
        raw = str(value or "").strip().lower()
        if raw == AIProvider.OPENAI.value:
            return AIProvider.OPENAI
        if raw and raw != AIProvider.GEMINI.value:
            logger.warning("Unknown AI provider, falling back to gemini", ai_provider=raw)
        return AIProvider.GEMINI
