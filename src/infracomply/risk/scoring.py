"""Project risk scoring and tiering."""

import math
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
import logging

from ..core.config import ComplianceConfig
from ..core.project import Project

logger = logging.getLogger(__name__)


class RiskTier(str, Enum):
    """Traffic-light risk tier."""

    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


class RiskAssessment(BaseModel):
    """Risk score for a single project with its components."""

    project_id: Optional[str] = None
    schedule_component: float = Field(ge=0)
    cost_component: float = Field(ge=0)
    alert_component: float = Field(ge=0)
    score: int = Field(ge=0, le=100)
    tier: RiskTier


class RiskScorer:
    """
    Additive risk score over schedule slip, cost overrun and critical alerts.

    Each component ramps linearly up to its own cap; the rounded sum is
    clamped to [0, 100].
    """

    def __init__(self, config: Optional[ComplianceConfig] = None):
        """Initialize risk scorer."""
        self.config = config or ComplianceConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def schedule_component(self, dcco_status: int) -> float:
        if dcco_status <= 0:
            return 0.0
        cap = self.config.get_score_cap("schedule")
        return min((dcco_status / self.config.get_schedule_full_days()) * cap, cap)

    def cost_component(self, sanction_amount: float, actual_cost: Optional[float]) -> float:
        # Zero sanction leaves the overrun undefined
        if not actual_cost or sanction_amount <= 0 or actual_cost <= sanction_amount:
            return 0.0
        cap = self.config.get_score_cap("cost")
        overrun_pct = (actual_cost - sanction_amount) / sanction_amount * 100
        return min((overrun_pct / self.config.get_cost_full_overrun_pct()) * cap, cap)

    def alert_component(self, critical_alerts_count: int) -> float:
        if critical_alerts_count <= 0:
            return 0.0
        cap = self.config.get_score_cap("alerts")
        return min(critical_alerts_count * self.config.get_points_per_critical_alert(), cap)

    def compute_risk_score(self, dcco_status: int, sanction_amount: float,
                           actual_cost: Optional[float] = None,
                           critical_alerts_count: int = 0) -> int:
        """Compute the 0-100 risk score."""
        total = (
            self.schedule_component(dcco_status)
            + self.cost_component(sanction_amount, actual_cost)
            + self.alert_component(critical_alerts_count)
        )
        return _clamp_score(_round_half_up(total))

    def tier_for_score(self, score: int) -> RiskTier:
        """Derive tier from score using configured thresholds."""
        if score >= self.config.get_tier_threshold("red"):
            return RiskTier.RED
        if score >= self.config.get_tier_threshold("yellow"):
            return RiskTier.YELLOW
        return RiskTier.GREEN

    def assess(self, project: Project, critical_alerts_count: int = 0) -> RiskAssessment:
        """Score a project and derive its tier."""
        schedule = self.schedule_component(project.dcco_status)
        cost = self.cost_component(project.sanction_amount, project.actual_cost)
        alerts = self.alert_component(critical_alerts_count)
        score = _clamp_score(_round_half_up(schedule + cost + alerts))

        self.logger.debug(
            f"Project {project.project_id}: schedule={schedule:.2f} cost={cost:.2f} "
            f"alerts={alerts:.2f} score={score}"
        )

        return RiskAssessment(
            project_id=project.project_id,
            schedule_component=schedule,
            cost_component=cost,
            alert_component=alerts,
            score=score,
            tier=self.tier_for_score(score),
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_score(score: int) -> int:
    return max(0, min(score, 100))


def compute_risk_score(dcco_status: int, sanction_amount: float,
                       actual_cost: Optional[float] = None,
                       critical_alerts_count: int = 0) -> int:
    """Compute risk score with the default configuration."""
    return RiskScorer().compute_risk_score(
        dcco_status, sanction_amount, actual_cost, critical_alerts_count
    )


def risk_tier_for_score(score: int) -> RiskTier:
    """Derive risk tier with the default thresholds."""
    return RiskScorer().tier_for_score(score)
