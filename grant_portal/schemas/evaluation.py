"""
Evaluation schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class EvaluationInsights(BaseModel):
    """Strengths and weaknesses found by the scoring rubric"""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendation: str = ""


class EvaluationResultResponse(BaseModel):
    """Schema for a rubric recommendation"""
    score: int
    decision: str
    comment: str
    insights: EvaluationInsights
    evaluation_id: Optional[int] = None  # set when the recommendation was persisted


class EvaluationCreate(BaseModel):
    """Schema for a reviewer evaluation"""
    score: Optional[int] = Field(None, ge=1, le=100)
    decision: str = Field(..., pattern="^(preporučeno|odbijeno|revisit)$")
    comment: str = Field(..., min_length=10)


class EvaluationResponse(BaseModel):
    """Schema for evaluation response"""
    id: int
    application_id: int
    evaluated_by: Optional[int]
    evaluator_type: str
    score: Optional[int]
    decision: Optional[str]
    comment: Optional[str]
    insights: Optional[EvaluationInsights]
    created_at: Optional[datetime]

    # Relations
    evaluator_name: Optional[str] = None

    class Config:
        from_attributes = True
