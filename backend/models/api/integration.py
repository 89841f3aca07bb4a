"""
Pydantic models for the integration (loader script) API
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from models.domain.visitor_context import VisitorContext


class ContextPayload(BaseModel):
    """
    Context reported by the loader script.

    Every field is optional; null or missing values become blank/zero.
    Unknown fields are ignored.
    """
    url: str = ""
    path: str = ""
    referrer: str = ""
    user_agent: str = Field(default="", alias="userAgent")
    language: str = ""
    screen_width: int = Field(default=0, alias="screenWidth")
    screen_height: int = Field(default=0, alias="screenHeight")
    timestamp: Optional[str] = None

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator('url', 'path', 'referrer', 'user_agent', 'language', mode='before')
    @classmethod
    def blank_strings(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator('screen_width', 'screen_height', mode='before')
    @classmethod
    def zero_dimensions(cls, v):
        if v is None or v == "":
            return 0
        try:
            return int(float(v))
        except (TypeError, ValueError, OverflowError):
            return 0

    @field_validator('timestamp', mode='before')
    @classmethod
    def stringify_timestamp(cls, v):
        if v is None:
            return None
        return v if isinstance(v, str) else str(v)

    def to_context(self) -> VisitorContext:
        return VisitorContext(
            url=self.url,
            path=self.path,
            referrer=self.referrer,
            user_agent=self.user_agent,
            language=self.language,
            screen_width=self.screen_width,
            screen_height=self.screen_height,
            timestamp=self.timestamp or "",
        )


class ResolvedVariantOut(BaseModel):
    selector: str
    content: str


class VariantsResponse(BaseModel):
    """Response body of POST /api/integration/variants"""
    variants: List[ResolvedVariantOut]


class ErrorResponse(BaseModel):
    error: str
