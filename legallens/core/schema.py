from __future__ import annotations

from pydantic import BaseModel, Field


class AnalysisResult(BaseModel):
    """Structured output returned by the analysis service for one document.

    Field names match the wire format, so a decoded response body can be
    validated directly with :meth:`model_validate`.
    """

    summary: str = Field(min_length=1)
    key_points: list[str]
    references: list[str]
