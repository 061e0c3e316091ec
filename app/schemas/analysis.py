from __future__ import annotations

from pydantic import BaseModel, Field

ANALYSIS_FIELDS = (
    "overallScore",
    "atsScore",
    "keywordsScore",
    "readabilityScore",
    "missingKeywords",
    "suggestions",
    "aiAnalysis",
)


class Suggestion(BaseModel):
    title: str
    description: str


class AnalysisResult(BaseModel):
    overallScore: int
    atsScore: int
    keywordsScore: int
    readabilityScore: int
    missingKeywords: list[str] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    aiAnalysis: str = ""


class ErrorResponse(BaseModel):
    detail: str


class HealthResponse(BaseModel):
    status: str
    upstream_configured: bool
