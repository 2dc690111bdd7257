"""Project loan definitions for the InfraComply engine."""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Dict, List
from pydantic import BaseModel, Field


class SectorBucket(str, Enum):
    """RBI provisioning buckets."""

    INFRASTRUCTURE = "infrastructure"
    CRE = "cre"


class Sector(str, Enum):
    """Financed project sectors."""

    HIGHWAY = "Highway"
    POWER = "Power"
    RESIDENTIAL = "Residential"
    CRE = "CRE"
    OTHER = "Other"

    @property
    def bucket(self) -> SectorBucket:
        """Provisioning bucket for this sector."""
        return _SECTOR_BUCKETS[self]


_SECTOR_BUCKETS: Dict[Sector, SectorBucket] = {
    Sector.HIGHWAY: SectorBucket.INFRASTRUCTURE,
    Sector.POWER: SectorBucket.INFRASTRUCTURE,
    Sector.OTHER: SectorBucket.INFRASTRUCTURE,
    Sector.RESIDENTIAL: SectorBucket.CRE,
    Sector.CRE: SectorBucket.CRE,
}


class ProjectStatus(str, Enum):
    """Loan account status."""

    ACTIVE = "Active"
    COMPLETED = "Completed"
    NPA = "NPA"
    CLOSED = "Closed"


class Project(BaseModel):
    """Project loan as read from the project register."""

    # Identification
    project_id: str
    loan_id: Optional[str] = None
    borrower_name: Optional[str] = None

    # Classification
    sector: Sector
    status: ProjectStatus = ProjectStatus.ACTIVE

    # Amounts in crores
    sanction_amount: float = Field(ge=0, description="Sanctioned loan amount")
    disbursed_amount: float = Field(default=0.0, ge=0, description="Amount paid out so far")
    actual_cost: Optional[float] = Field(None, ge=0, description="Actual project cost, if known")

    # Schedule
    dcco_status: int = Field(default=0, description="DCCO deferment in days (negative = early)")

    def is_active(self) -> bool:
        """Check if project participates in alerting and provisioning."""
        return self.status == ProjectStatus.ACTIVE

    def cost_overrun_percentage(self) -> Optional[float]:
        """Overrun of actual cost over sanction, in percent.

        Returns None when no overrun can be computed (cost unknown or zero
        sanction). Under-runs come back negative.
        """
        if not self.actual_cost or self.sanction_amount <= 0:
            return None
        return (self.actual_cost - self.sanction_amount) / self.sanction_amount * 100

    def exceeds_cost_margin(self, margin_pct: float) -> bool:
        """Check if actual cost is above sanction plus the given margin."""
        if not self.actual_cost or self.sanction_amount <= 0:
            return False
        return self.actual_cost > self.sanction_amount * (1 + margin_pct / 100)


def round_half_up(value: float, places: int) -> float:
    """Round to a fixed number of decimals with ties going away from zero.

    Works on the exact binary value of the float, so 14.625 becomes 14.63
    where the built-in round() gives 14.62.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def filter_active(projects: List[Project]) -> List[Project]:
    """Keep only Active projects, preserving input order."""
    return [project for project in projects if project.is_active()]
