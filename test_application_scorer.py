#!/usr/bin/env python3
"""
Application scoring rubric tests
"""
from types import SimpleNamespace

import pytest

from grant_portal.domain import Decision
from grant_portal.errors import ValidationError
from grant_portal.services.application_scorer import RECOMMENDATIONS, score_application


def application(requested_amount=10000, description="x" * 100, organization="Udruženje", project_duration=12):
    return SimpleNamespace(
        requested_amount=requested_amount,
        description=description,
        organization=organization,
        project_duration=project_duration,
    )


def program(budget_total=100000):
    return SimpleNamespace(budget_total=budget_total)


def test_strong_application():
    result = score_application(
        application(requested_amount=5000, description="d" * 350, organization="X", project_duration=4),
        program(100000),
    )
    assert result.score == 100
    assert result.decision is Decision.RECOMMENDED
    assert result.insights.strengths == [
        "reasonable budget request",
        "detailed description",
        "clear organizational information",
        "focused, achievable timeline",
    ]
    assert result.insights.weaknesses == []
    assert result.insights.recommendation == RECOMMENDATIONS[Decision.RECOMMENDED]


def test_weak_application():
    result = score_application(
        application(requested_amount=40000, description="d" * 50, organization=None, project_duration=30),
        program(100000),
    )
    assert result.score == 50
    assert result.decision is Decision.REJECTED
    assert result.insights.weaknesses == [
        "requested amount is a significant portion of the budget",
        "description could be more comprehensive",
        "missing organizational details",
        "timeline may be too long",
    ]


def test_middle_band_is_revisit():
    result = score_application(application(requested_amount=20000, project_duration=12), program(100000))
    # 75 - 5 (description) + 5 (organization)
    assert result.score == 75
    assert result.decision is Decision.REVISIT


@pytest.mark.parametrize("amount, expected", [
    (9999, 85),    # below 10%
    (10000, 75),   # exactly 10%, no adjustment
    (30000, 75),   # exactly 30%, no adjustment
    (30001, 60),   # above 30%
])
def test_budget_ratio_boundaries(amount, expected):
    result = score_application(
        application(requested_amount=amount, description="d" * 301, organization="", project_duration=6),
        program(100000),
    )
    # base 75 + 5 description + 0 organization + 0 duration
    assert result.score == expected + 5


def test_description_boundary():
    assert score_application(application(description="d" * 300), program()).score == 75
    assert score_application(application(description="d" * 301), program()).score == 85


def test_duration_boundaries():
    assert score_application(application(project_duration=6), program()).score == 75
    assert score_application(application(project_duration=24), program()).score == 75
    assert score_application(application(project_duration=5), program()).score == 80
    assert score_application(application(project_duration=25), program()).score == 70


def test_zero_budget_skips_budget_rule():
    result = score_application(application(requested_amount=10 ** 9), program(0))
    assert "requested amount is a significant portion of the budget" not in result.insights.weaknesses
    assert result.score == 75


def test_missing_amount_and_duration_skip_rules():
    result = score_application(application(requested_amount=None, project_duration=None), program())
    assert result.score == 75


def test_blank_organization_is_missing():
    result = score_application(application(organization="   "), program())
    assert "missing organizational details" in result.insights.weaknesses


def test_decision_thresholds():
    # 80 exactly: 75 + 5 organization + 5 description - 5 duration
    result = score_application(application(description="d" * 301, project_duration=25), program())
    assert result.score == 80
    assert result.decision is Decision.RECOMMENDED

    # 60 exactly: 75 - 15 budget - 5 description + 5 organization
    result = score_application(application(requested_amount=50000), program())
    assert result.score == 60
    assert result.decision is Decision.REVISIT


def test_score_is_clamped():
    result = score_application(
        application(requested_amount=1, description="d" * 400, organization="X", project_duration=1),
        program(100000),
    )
    assert 0 <= result.score <= 100


def test_comment_contains_insights():
    result = score_application(application(requested_amount=40000, organization=None), program())
    assert "requested amount is a significant portion of the budget" in result.comment
    assert result.comment.endswith(result.insights.recommendation)


def test_repeated_scoring_is_identical():
    app, prog = application(), program()
    assert score_application(app, prog) == score_application(app, prog)


@pytest.mark.parametrize("kwargs", [{"requested_amount": -1}, {"project_duration": -3}])
def test_negative_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        score_application(application(**kwargs), program())


def test_negative_budget_rejected():
    with pytest.raises(ValidationError):
        score_application(application(), program(-100))


def test_to_dict():
    data = score_application(application(), program()).to_dict()
    assert data["decision"] in {"preporučeno", "odbijeno", "revisit"}
    assert set(data["insights"]) == {"strengths", "weaknesses", "recommendation"}
