from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .provider.input_tools import DEFAULT_SUGGESTIONS, MAX_SUGGESTIONS


class TextRequest(BaseModel):
    text: Optional[str] = Field(
        default=None, description="Romanized Nepali text typed by the user"
    )


class TransliterateRequest(TextRequest):
    engine: Literal["translate", "inputtools"] = Field(
        default="translate",
        description="Upstream used for the conversion: Google Translate or Google Input Tools",
    )


class SuggestRequest(TextRequest):
    num: int = Field(
        default=DEFAULT_SUGGESTIONS,
        ge=1,
        le=MAX_SUGGESTIONS,
        description="Maximum number of candidates to return",
    )


class ResultResponse(BaseModel):
    result: str = ""


class SuggestResponse(BaseModel):
    suggestions: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini: bool = False
