"""Main InfraComply engine coordinating provisioning, scoring and alerting."""

from typing import Dict, Any, Optional, List
import logging

from .config import ComplianceConfig
from .project import Project, filter_active
from ..accounting.provisions import ProvisionCalculator, PortfolioProvisionSummary
from ..alerts.engine import AlertEngine, AlertCycleResult, AlertSink, OpenAlertLookup
from ..metrics.portfolio import portfolio_exposure, risk_distribution, summarize_distribution
from ..risk.scoring import RiskScorer, RiskAssessment


logger = logging.getLogger(__name__)


class ComplianceEngine:
    """Main engine for RBI project-loan compliance calculations."""

    def __init__(self, config: Optional[ComplianceConfig] = None):
        """Initialize compliance engine with configuration."""
        self.config = config or ComplianceConfig.load_default()

        self.provision_calculator = ProvisionCalculator(self.config)
        self.risk_scorer = RiskScorer(self.config)

        logger.info("InfraComply engine initialized")

    def alert_engine(self, has_open_alert: Optional[OpenAlertLookup] = None) -> AlertEngine:
        """Alert engine bound to a de-duplication lookup."""
        return AlertEngine(self.config, has_open_alert)

    def calculate_portfolio_provisions(self, projects: List[Project]) -> PortfolioProvisionSummary:
        """Provision summary over the Active projects."""
        return self.provision_calculator.aggregate_provisions(filter_active(projects))

    def score_projects(self, projects: List[Project],
                       critical_alert_counts: Optional[Dict[str, int]] = None) -> List[RiskAssessment]:
        """Risk assessment for each project, in input order."""
        counts = critical_alert_counts or {}
        return [
            self.risk_scorer.assess(project, counts.get(project.project_id, 0))
            for project in projects
        ]

    def run_evaluation_cycle(self, projects: List[Project],
                             has_open_alert: Optional[OpenAlertLookup] = None,
                             insert_alerts: Optional[AlertSink] = None) -> AlertCycleResult:
        """Run one alert evaluation cycle over the given projects."""
        return self.alert_engine(has_open_alert).run_cycle(projects, insert_alerts)

    def validate_inputs(self, projects: List[Project]) -> List[str]:
        """Validate inputs and return list of issues."""
        issues = []

        if not projects:
            issues.append("Project list is empty")

        seen = set()
        for i, project in enumerate(projects):
            if project.project_id in seen:
                issues.append(f"Project {i} has duplicate id {project.project_id}")
            seen.add(project.project_id)

            if project.sanction_amount == 0:
                issues.append(f"Project {project.project_id} has zero sanction amount")

            if project.disbursed_amount > project.sanction_amount:
                issues.append(f"Project {project.project_id} has disbursed more than sanctioned")

        return issues

    def get_summary_metrics(self, projects: List[Project],
                            critical_alert_counts: Optional[Dict[str, int]] = None) -> Dict[str, Any]:
        """Get summary of key portfolio metrics over Active projects."""
        active = filter_active(projects)
        provisions = self.provision_calculator.aggregate_provisions(active)
        assessments = self.score_projects(active, critical_alert_counts)
        exposure = portfolio_exposure(active)

        return {
            "exposure": {
                "total_exposure": exposure.total_exposure,
                "total_projects": exposure.total_projects,
                "sector_breakdown": exposure.sector_breakdown,
            },
            "provisions": {
                "total_provision": provisions.total_provision,
                "sector_breakdown": provisions.sector_breakdown,
                "coverage_ratio": (
                    provisions.total_provision / exposure.total_exposure
                    if exposure.total_exposure > 0 else 0
                ),
            },
            "risk": summarize_distribution(risk_distribution(assessments, active)),
        }
