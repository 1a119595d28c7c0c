"""Wire records for the Gemini ``generateContent`` endpoint."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Part(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None


class Content(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_output_tokens: int = Field(alias="maxOutputTokens")
    temperature: float
    top_p: float = Field(alias="topP")


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: GenerationConfig = Field(alias="generationConfig")


class _Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class GenerateContentResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    candidates: List[_Candidate] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


__all__ = [
    "Part",
    "Content",
    "GenerationConfig",
    "GenerateContentRequest",
    "GenerateContentResponse",
]
