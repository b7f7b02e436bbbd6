"""Single-word answers from a remote text-completion provider.

One provider (Gemini or OpenAI) is selected from `Settings` when the gateway
is constructed and stays fixed for the life of the process.

Call flow:
    `AIGateway.ask(question)` -> provider checks its credential
    (`AIConfigError` before any network I/O) -> `requests.post` with the
    provider payload -> non-2xx status or transport failure raises
    `AIProviderError` -> body parsed into the provider's response schema ->
    `first_word` of the extracted text.

Malformed or unexpected response bodies are not errors: they yield an empty
string, which is a valid answer. Each call is attempted once, bounded by
`Settings.ai_timeout_seconds`.
"""

import re
from typing import Any, Dict, List, Optional, Type

import requests
import structlog
from pydantic import BaseModel, ValidationError

from bfhl.config import AIProvider, Settings
from bfhl.errors import AIConfigError, AIProviderError

logger = structlog.get_logger(__name__)

GEMINI_URL_TEMPLATE = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
OPENAI_URL = "https://api.openai.com/v1/responses"
OPENAI_MAX_OUTPUT_TOKENS = 16

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


def first_word(text: Optional[str]) -> str:
    match = _WORD_RE.search((text or "").strip())
    return match.group(0) if match else ""


# ============================================================
# Provider response schemas
# ============================================================

class GeminiPart(BaseModel):
    text: Optional[str] = None


class GeminiContent(BaseModel):
    parts: List[GeminiPart] = []


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None


class GeminiResponse(BaseModel):
    candidates: List[GeminiCandidate] = []

    def text(self) -> str:
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return " ".join(part.text or "" for part in self.candidates[0].content.parts)


class OpenAIContentBlock(BaseModel):
    type: Optional[str] = None
    text: Optional[str] = None


class OpenAIOutputItem(BaseModel):
    content: List[OpenAIContentBlock] = []


class OpenAIResponse(BaseModel):
    output: List[OpenAIOutputItem] = []

    def text(self) -> str:
        chunks = []
        for item in self.output:
            for block in item.content:
                if block.type == "output_text":
                    chunks.append(f"{block.text or ''} ")
        return "".join(chunks)


# ============================================================
# Providers
# ============================================================

class Provider:
    name = ""
    response_schema: Type[BaseModel]

    def __init__(self, api_key: str, model: str, timeout: float):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    def build_request(self, question: str) -> Dict[str, Any]:
        """Keyword arguments for `requests.post`."""
        raise NotImplementedError

    def extract_text(self, body: Any) -> str:
        try:
            parsed = self.response_schema.model_validate(body)
        except ValidationError:
            logger.warning("Unexpected provider response shape", provider=self.name)
            return ""
        return parsed.text()

    def complete(self, question: str) -> str:
        if not self.api_key:
            raise AIConfigError(f"{self.name.upper()}_API_KEY not configured")

        request = self.build_request(question)
        logger.info("Calling AI provider", provider=self.name, model=self.model)
        try:
            resp = requests.post(timeout=self.timeout, **request)
        except requests.RequestException as exc:
            logger.warning("AI provider unreachable", provider=self.name, error=type(exc).__name__)
            raise AIProviderError() from exc

        if resp.status_code >= 400:
            logger.warning("AI provider error", provider=self.name, status=resp.status_code)
            raise AIProviderError(resp.status_code)

        try:
            body = resp.json()
        except ValueError:
            logger.warning("AI provider returned non-JSON body", provider=self.name)
            return ""
        return self.extract_text(body)


class GeminiProvider(Provider):
    name = AIProvider.GEMINI.value
    response_schema = GeminiResponse

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiProvider":
        return cls(settings.gemini_api_key, settings.gemini_model, settings.ai_timeout_seconds)

    def build_request(self, question: str) -> Dict[str, Any]:
        return {
            "url": GEMINI_URL_TEMPLATE.format(model=self.model),
            "params": {"key": self.api_key},
            "headers": {"Content-Type": "application/json"},
            "json": {
                "contents": [
                    {"role": "user", "parts": [{"text": question}]},
                ],
            },
        }


class OpenAIProvider(Provider):
    name = AIProvider.OPENAI.value
    response_schema = OpenAIResponse

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIProvider":
        return cls(settings.openai_api_key, settings.openai_model, settings.ai_timeout_seconds)

    def build_request(self, question: str) -> Dict[str, Any]:
        return {
            "url": OPENAI_URL,
            "headers": {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            "json": {
                "model": self.model,
                "input": question,
                "max_output_tokens": OPENAI_MAX_OUTPUT_TOKENS,
            },
        }


PROVIDERS = {
    AIProvider.GEMINI: GeminiProvider,
    AIProvider.OPENAI: OpenAIProvider,
}


class AIGateway:
    def __init__(self, settings: Settings):
        self.provider = PROVIDERS[settings.ai_provider].from_settings(settings)

    def ask(self, question: str) -> str:
        """Return the first alphanumeric word of the provider's answer, possibly ``""``."""
        return first_word(self.provider.complete(question))
