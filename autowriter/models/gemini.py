"""Wire shapes of the Gemini ``generateContent`` REST endpoint.

Only the fields this service reads are modelled; everything else is ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

BLOCKED_FINISH_REASONS = {"SAFETY", "RECITATION", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}


class _GeminiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Part(_GeminiModel):
    text: Optional[str] = None


class Content(_GeminiModel):
    parts: list[Part] = []
    role: Optional[str] = None


class Candidate(_GeminiModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = None

    @property
    def text(self) -> str:
        if self.content is None or not self.content.parts:
            return ""
        return self.content.parts[0].text or ""

    @property
    def is_blocked(self) -> bool:
        return (self.finish_reason or "").upper() in BLOCKED_FINISH_REASONS


class PromptFeedback(_GeminiModel):
    block_reason: Optional[str] = None


class ApiErrorBody(_GeminiModel):
    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None


class GeminiResponse(_GeminiModel):
    candidates: list[Candidate] = []
    prompt_feedback: Optional[PromptFeedback] = None
    error: Optional[ApiErrorBody] = None
