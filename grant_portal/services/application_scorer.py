"""
Application scoring rubric

Deterministic recommendation for a grant application. Every call recomputes
the result from the application and program alone; earlier evaluations are
never taken into account.
"""
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from grant_portal.domain import Decision
from grant_portal.errors import ValidationError

logger = logging.getLogger(__name__)

BASE_SCORE = 75
MIN_SCORE = 0
MAX_SCORE = 100

RECOMMEND_THRESHOLD = 80
REJECT_THRESHOLD = 60

LOW_BUDGET_RATIO = 0.1
HIGH_BUDGET_RATIO = 0.3
DETAILED_DESCRIPTION_LENGTH = 300
LONG_TIMELINE_MONTHS = 24
SHORT_TIMELINE_MONTHS = 6

RECOMMENDATIONS = {
    Decision.RECOMMENDED: "Recommended for approval. The application is well prepared and fits the program budget.",
    Decision.REJECTED: "Not recommended in its current form. The application needs significant improvement before it can be funded.",
    Decision.REVISIT: "Needs discussion. The application has merit but the committee should review the weaknesses before deciding.",
}


@dataclass
class EvaluationInsights:
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendation: str = ""


@dataclass
class EvaluationResult:
    score: int
    decision: Decision
    comment: str
    insights: EvaluationInsights

    def to_dict(self) -> dict:
        data = asdict(self)
        data["decision"] = self.decision.value
        return data


def decide(score: int) -> Decision:
    if score >= RECOMMEND_THRESHOLD:
        return Decision.RECOMMENDED
    if score < REJECT_THRESHOLD:
        return Decision.REJECTED
    return Decision.REVISIT


def build_comment(insights: EvaluationInsights) -> str:
    parts = []
    if insights.strengths:
        parts.append("Strengths: " + "; ".join(insights.strengths) + ".")
    if insights.weaknesses:
        parts.append("Weaknesses: " + "; ".join(insights.weaknesses) + ".")
    parts.append(insights.recommendation)
    return " ".join(parts)


def _check_non_negative(name: str, value: Optional[int]):
    if value is not None and value < 0:
        raise ValidationError(f"{name} cannot be negative, got {value}")


def score_application(application, program, applicant=None) -> EvaluationResult:
    """
    Score an application against its program

    Args:
        application: Object with requested_amount, description, organization, project_duration
        program: Object with budget_total
        applicant: Applicant user, accepted for callers that have it; the rubric does not use it

    Returns:
        EvaluationResult with the score clamped to 0-100

    Raises:
        ValidationError: Negative amount, duration or budget
    """
    requested_amount = application.requested_amount
    project_duration = application.project_duration
    budget_total = program.budget_total or 0

    _check_non_negative("requested_amount", requested_amount)
    _check_non_negative("project_duration", project_duration)
    _check_non_negative("budget_total", budget_total)

    score = BASE_SCORE
    insights = EvaluationInsights()

    # Budget
    if budget_total > 0 and requested_amount is not None:
        ratio = requested_amount / budget_total
        if ratio < LOW_BUDGET_RATIO:
            score += 10
            insights.strengths.append("reasonable budget request")
        elif ratio > HIGH_BUDGET_RATIO:
            score -= 15
            insights.weaknesses.append("requested amount is a significant portion of the budget")

    # Description
    if len(application.description or "") > DETAILED_DESCRIPTION_LENGTH:
        score += 5
        insights.strengths.append("detailed description")
    else:
        score -= 5
        insights.weaknesses.append("description could be more comprehensive")

    # Organization
    if (application.organization or "").strip():
        score += 5
        insights.strengths.append("clear organizational information")
    else:
        insights.weaknesses.append("missing organizational details")

    # Timeline
    if project_duration is not None:
        if project_duration > LONG_TIMELINE_MONTHS:
            score -= 5
            insights.weaknesses.append("timeline may be too long")
        elif project_duration < SHORT_TIMELINE_MONTHS:
            score += 5
            insights.strengths.append("focused, achievable timeline")

    score = max(MIN_SCORE, min(MAX_SCORE, score))
    decision = decide(score)
    insights.recommendation = RECOMMENDATIONS[decision]

    return EvaluationResult(
        score=score,
        decision=decision,
        comment=build_comment(insights),
        insights=insights,
    )
