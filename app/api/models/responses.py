"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

StatusValue = Literal["good", "warning", "critical", "info", "unknown"]


class SignalModel(BaseModel):
    """One extracted signal and its status."""

    category: str
    name: str
    value: Any = None
    status: StatusValue
    detail: str | None = None


class CategoryReportModel(BaseModel):
    """Facts and signals for one audit category."""

    category: str
    facts: dict[str, Any] = Field(default_factory=dict)
    signals: list[SignalModel] = Field(default_factory=list)


class RecommendationModel(BaseModel):
    """Prioritized fix."""

    category: str = Field(..., description="Recommendation area, e.g. MetaTags")
    priority: Literal["Critical", "High", "Medium", "Low"]
    message: str
    actionable_advice: str
    impact_score: int = Field(..., ge=0, le=10)


class AuditResponse(BaseModel):
    """Complete audit result."""

    url: str
    success: bool
    error: str | None = None
    audited_at: datetime
    overall_score: int = Field(..., ge=0, le=100, description="Overall SEO score (0-100)")
    grade: Literal["A", "B", "C", "D", "F"] = Field(..., description="Letter grade")
    category_scores: dict[str, int] = Field(
        default_factory=dict, description="0-100 score per category"
    )
    categories: dict[str, CategoryReportModel] = Field(default_factory=dict)
    recommendations: list[RecommendationModel] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "https://example.com/article",
                "success": True,
                "error": None,
                "audited_at": "2024-01-15T10:30:00Z",
                "overall_score": 78,
                "grade": "B",
                "category_scores": {"metadata": 90, "content": 65},
                "categories": {},
                "recommendations": [
                    {
                        "category": "MetaTags",
                        "priority": "High",
                        "message": "Missing Meta Description",
                        "actionable_advice": "Add a <meta name=\"description\"> tag summarizing the page content.",
                        "impact_score": 8,
                    }
                ],
            }
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual health check results"
    )
