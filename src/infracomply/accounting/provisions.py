"""RBI provisioning engine for project loans."""

import math
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
import logging

from ..core.config import ComplianceConfig
from ..core.project import Project, Sector

logger = logging.getLogger(__name__)


class ProvisionCalculation(BaseModel):
    """Provision requirement for a single project."""

    project_id: Optional[str] = None
    loan_id: Optional[str] = None
    borrower_name: Optional[str] = None

    sector: Sector
    sanction_amount: float = Field(ge=0)
    dcco_deferment_days: int
    dcco_deferment_quarters: int = Field(ge=0)

    base_provision_rate: float = Field(ge=0)
    base_provision_amount: float = Field(ge=0)
    additional_provision_rate: float = Field(ge=0)
    additional_provision_amount: float = Field(ge=0)
    total_provision: float = Field(ge=0)


class PortfolioProvisionSummary(BaseModel):
    """Provisions aggregated over a set of projects."""

    calculations: List[ProvisionCalculation] = Field(default_factory=list)
    total_provision: float = Field(default=0.0, ge=0)
    sector_breakdown: Dict[str, float] = Field(default_factory=dict)
    project_count: int = Field(default=0, ge=0)


class ProvisionCalculator:
    """
    Calculator for RBI project-loan provisions.

    Base provision is a flat rate on the sanctioned amount depending on the
    sector bucket. Each started quarter of DCCO deferment adds a further
    fixed rate.
    """

    def __init__(self, config: Optional[ComplianceConfig] = None):
        """Initialize provision calculator."""
        self.config = config or ComplianceConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def deferment_quarters(self, dcco_deferment_days: int) -> int:
        """Number of started quarters of deferment; early or on-time counts as zero."""
        if dcco_deferment_days <= 0:
            return 0
        return math.ceil(dcco_deferment_days / self.config.get_deferment_quarter_days())

    def calculate_provision(self, sanction_amount: float, sector: Sector,
                            dcco_deferment_days: int) -> ProvisionCalculation:
        """Calculate base and additional provision for one loan."""
        sector = Sector(sector)

        base_provision_rate = self.config.get_base_provision_rate(sector.bucket.value)
        base_provision_amount = sanction_amount * base_provision_rate

        quarters = self.deferment_quarters(dcco_deferment_days)
        additional_provision_rate = quarters * self.config.get_additional_rate_per_quarter()
        additional_provision_amount = sanction_amount * additional_provision_rate

        return ProvisionCalculation(
            sector=sector,
            sanction_amount=sanction_amount,
            dcco_deferment_days=dcco_deferment_days,
            dcco_deferment_quarters=quarters,
            base_provision_rate=base_provision_rate,
            base_provision_amount=base_provision_amount,
            additional_provision_rate=additional_provision_rate,
            additional_provision_amount=additional_provision_amount,
            total_provision=base_provision_amount + additional_provision_amount,
        )

    def calculate_for_project(self, project: Project) -> ProvisionCalculation:
        """Calculate provision for a project, carrying its identity through."""
        calculation = self.calculate_provision(
            project.sanction_amount, project.sector, project.dcco_status
        )
        return calculation.model_copy(update={
            "project_id": project.project_id,
            "loan_id": project.loan_id,
            "borrower_name": project.borrower_name,
        })

    def aggregate_provisions(self, projects: List[Project]) -> PortfolioProvisionSummary:
        """Aggregate provisions over exactly the projects given, in input order."""
        self.logger.info(f"Aggregating provisions for {len(projects)} projects")

        calculations = [self.calculate_for_project(project) for project in projects]

        sector_breakdown: Dict[str, float] = {}
        for calc in calculations:
            sector = calc.sector.value
            sector_breakdown[sector] = sector_breakdown.get(sector, 0.0) + calc.total_provision

        return PortfolioProvisionSummary(
            calculations=calculations,
            total_provision=sum(calc.total_provision for calc in calculations),
            sector_breakdown=sector_breakdown,
            project_count=len(calculations),
        )


def calculate_provision(sanction_amount: float, sector: Sector,
                        dcco_deferment_days: int) -> ProvisionCalculation:
    """Calculate provision with the default configuration."""
    return ProvisionCalculator().calculate_provision(sanction_amount, sector, dcco_deferment_days)


def aggregate_provisions(projects: List[Project]) -> PortfolioProvisionSummary:
    """Aggregate provisions with the default configuration."""
    return ProvisionCalculator().aggregate_provisions(projects)
