"""Analysis request/response schemas."""

from typing import Any

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Request to analyse one website."""

    url: str = Field(..., description="Address to analyse; https:// is assumed if omitted")
    timeout_seconds: float | None = Field(
        None,
        gt=0,
        le=300,
        description="Deadline for fetching the page; server default if omitted",
    )


class ScoresResponse(BaseModel):
    """The four category scores and their rounded mean."""

    seo: int
    security: int
    accessibility: int
    performance: int
    average: int


class AnalysisReportResponse(BaseModel):
    """Analysis report as returned by the API."""

    version: str
    url: str
    title: str
    analyzed_at: str
    scores: ScoresResponse
    recommendations: list[str]
    meta_description: str
    meta_keywords: str
    content_size: str
    heading_summary: str
    alt_coverage_percent: float
    technologies: list[str]
    social_presence: dict[str, str]
    signals: dict[str, Any]
