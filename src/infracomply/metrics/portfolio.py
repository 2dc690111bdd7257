"""Portfolio-level exposure and risk metrics."""

from datetime import date, datetime, timedelta
from typing import Dict, List, Any, Optional, Union
from pydantic import BaseModel, Field

from ..alerts.models import Alert
from ..core.config import ComplianceConfig
from ..core.project import Project, round_half_up
from ..risk.scoring import RiskAssessment, RiskTier


class PortfolioExposure(BaseModel):
    """Sanctioned exposure by sector."""

    total_exposure: float = Field(ge=0)
    total_projects: int = Field(ge=0)
    sector_breakdown: Dict[str, float]


class TierBucket(BaseModel):
    """Projects and exposure in one risk tier."""

    tier: RiskTier
    count: int = Field(ge=0)
    exposure: float = Field(ge=0)


class TopRiskProject(BaseModel):
    """At-risk project with its headline issue."""

    project_id: str
    loan_id: Optional[str] = None
    borrower_name: Optional[str] = None
    score: int
    tier: RiskTier
    key_issue: str


class TimelinePoint(BaseModel):
    """Credit events raised in a week starting on Sunday."""

    week_start: date
    count: int = Field(ge=0)


def portfolio_exposure(projects: List[Project]) -> PortfolioExposure:
    """Sum sanctioned amounts overall and per sector."""
    sector_breakdown: Dict[str, float] = {}
    for project in projects:
        sector = project.sector.value
        sector_breakdown[sector] = sector_breakdown.get(sector, 0.0) + project.sanction_amount

    return PortfolioExposure(
        total_exposure=sum(project.sanction_amount for project in projects),
        total_projects=len(projects),
        sector_breakdown=sector_breakdown,
    )


def risk_distribution(assessments: List[RiskAssessment],
                      projects: List[Project]) -> List[TierBucket]:
    """Count and exposure per tier; every tier is present, Green first."""
    amounts = {project.project_id: project.sanction_amount for project in projects}
    buckets = {tier: TierBucket(tier=tier, count=0, exposure=0.0) for tier in RiskTier}

    for assessment in assessments:
        bucket = buckets[assessment.tier]
        bucket.count += 1
        bucket.exposure += amounts.get(assessment.project_id, 0.0)

    return [buckets[RiskTier.GREEN], buckets[RiskTier.YELLOW], buckets[RiskTier.RED]]


def key_issue(project: Project, config: Optional[ComplianceConfig] = None) -> str:
    """Headline issue text for a project.

    Uses the same breach tests as the alert rules, so a project only shows
    an issue that would also raise an alert.
    """
    config = config or ComplianceConfig()
    issues = []
    if project.dcco_status > config.get_alert_threshold("dcco_breach_days"):
        issues.append(f"DCCO deferred {project.dcco_status} days")

    if project.exceeds_cost_margin(config.get_alert_threshold("cost_overrun_breach_pct")):
        overrun = round_half_up(project.cost_overrun_percentage(), 1)
        issues.append(f"Cost overrun {overrun:.1f}%")

    return ", ".join(issues) or "Multiple risk factors"


def top_risk_projects(assessments: List[RiskAssessment], projects: List[Project],
                      limit: int = 5,
                      config: Optional[ComplianceConfig] = None) -> List[TopRiskProject]:
    """Highest-scoring projects with their key issue."""
    by_id = {project.project_id: project for project in projects}
    ranked = sorted(
        (a for a in assessments if a.project_id in by_id),
        key=lambda a: a.score,
        reverse=True,
    )

    top = []
    for assessment in ranked[:limit]:
        project = by_id[assessment.project_id]
        top.append(TopRiskProject(
            project_id=project.project_id,
            loan_id=project.loan_id,
            borrower_name=project.borrower_name,
            score=assessment.score,
            tier=assessment.tier,
            key_issue=key_issue(project, config),
        ))
    return top


def week_start(day: Union[date, datetime]) -> date:
    """Sunday on or before the given day."""
    if isinstance(day, datetime):
        day = day.date()
    # weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def credit_events_timeline(alerts: List[Alert], today: Union[date, datetime],
                           days: int = 30) -> List[TimelinePoint]:
    """Weekly counts of alerts raised in the trailing window."""
    if isinstance(today, datetime):
        today = today.date()
    cutoff = today - timedelta(days=days)

    weekly: Dict[date, int] = {}
    for alert in alerts:
        if alert.created_at is None or alert.created_at.date() < cutoff:
            continue
        key = week_start(alert.created_at)
        weekly[key] = weekly.get(key, 0) + 1

    return [TimelinePoint(week_start=key, count=count) for key, count in sorted(weekly.items())]


def summarize_distribution(buckets: List[TierBucket]) -> Dict[str, Any]:
    """Plain dict view keyed by tier name."""
    return {
        bucket.tier.value: {"count": bucket.count, "exposure": bucket.exposure}
        for bucket in buckets
    }
