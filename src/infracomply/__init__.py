"""InfraComply - RBI provisioning, risk scoring and credit event alerting for project loans."""

# Core engine and components
from .core.engine import ComplianceEngine
from .core.config import ComplianceConfig
from .core.project import Project, ProjectStatus, Sector, SectorBucket
from .core.audit import AuditEntry, apply_project_update

# Provisioning
from .accounting.provisions import (
    ProvisionCalculator, ProvisionCalculation, PortfolioProvisionSummary,
    calculate_provision, aggregate_provisions,
)

# Risk scoring
from .risk.scoring import RiskScorer, RiskAssessment, RiskTier, compute_risk_score, risk_tier_for_score

# Credit event alerting
from .alerts.models import Alert, AlertType, AlertSeverity, AlertStatus
from .alerts.engine import AlertEngine, AlertCycleResult, evaluate_project
from .alerts.store import InMemoryAlertStore

# Regulatory reporting
from .reporting.crilc import CRILCReportGenerator, CRILCReport

# Synthetic data
from .simulator.projects import ProjectBookGenerator

__version__ = "0.1.0"
__author__ = "InfraComply Contributors"

__all__ = [
    # Core components
    "ComplianceEngine",
    "ComplianceConfig",
    "Project",
    "ProjectStatus",
    "Sector",
    "SectorBucket",
    "AuditEntry",
    "apply_project_update",

    # Provisioning
    "ProvisionCalculator",
    "ProvisionCalculation",
    "PortfolioProvisionSummary",
    "calculate_provision",
    "aggregate_provisions",

    # Risk
    "RiskScorer",
    "RiskAssessment",
    "RiskTier",
    "compute_risk_score",
    "risk_tier_for_score",

    # Alerts
    "Alert",
    "AlertType",
    "AlertSeverity",
    "AlertStatus",
    "AlertEngine",
    "AlertCycleResult",
    "evaluate_project",
    "InMemoryAlertStore",

    # Reporting
    "CRILCReportGenerator",
    "CRILCReport",

    # Simulation
    "ProjectBookGenerator",
]
