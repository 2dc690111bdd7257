"""Synthetic project book generation for testing and demonstrations."""

from typing import Dict, List, Optional
from enum import Enum
import numpy as np

from ..core.project import Project, ProjectStatus, Sector


class BookProfile(str, Enum):
    """Stress profile of a generated project book."""

    HEALTHY = "healthy"       # Mostly on schedule and on budget
    BALANCED = "balanced"     # Typical lender book
    STRESSED = "stressed"     # Widespread slippage and overruns


# Mean DCCO slip (days), share of projects with overruns, mean overrun (fraction)
_PROFILE_PARAMS: Dict[BookProfile, Dict[str, float]] = {
    BookProfile.HEALTHY: {"mean_slip": 10, "overrun_share": 0.1, "mean_overrun": 0.04},
    BookProfile.BALANCED: {"mean_slip": 60, "overrun_share": 0.3, "mean_overrun": 0.09},
    BookProfile.STRESSED: {"mean_slip": 150, "overrun_share": 0.6, "mean_overrun": 0.18},
}

# Median sanction size in crores
_SECTOR_SIZES: Dict[Sector, float] = {
    Sector.HIGHWAY: 450.0,
    Sector.POWER: 800.0,
    Sector.RESIDENTIAL: 120.0,
    Sector.CRE: 250.0,
    Sector.OTHER: 90.0,
}

_SECTOR_WEIGHTS = [0.3, 0.25, 0.2, 0.15, 0.1]

_BORROWER_SUFFIXES = ["Infra Ltd", "Power Corp", "Developers Pvt Ltd", "Realty Ltd", "Projects Ltd"]


class ProjectBookGenerator:
    """Generator for synthetic project loan books with a fixed seed."""

    def __init__(self, seed: Optional[int] = None):
        """Initialize generator with optional random seed for reproducibility."""
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def generate_projects(self, count: int = 50,
                          profile: BookProfile = BookProfile.BALANCED,
                          active_share: float = 0.85) -> List[Project]:
        """Generate a project book."""
        params = _PROFILE_PARAMS[BookProfile(profile)]
        sectors = list(_SECTOR_SIZES)

        projects = []
        for i in range(count):
            sector = sectors[int(self.rng.choice(len(sectors), p=_SECTOR_WEIGHTS))]
            sanction = round(float(self.rng.lognormal(np.log(_SECTOR_SIZES[sector]), 0.6)), 2)
            disbursed = round(sanction * float(self.rng.uniform(0.3, 1.0)), 2)

            # Some projects finish early; slippage is right-skewed
            slip = int(round(self.rng.normal(params["mean_slip"], params["mean_slip"] * 0.8 + 15)))

            actual_cost = None
            if self.rng.random() < params["overrun_share"]:
                overrun = max(0.0, float(self.rng.normal(params["mean_overrun"], 0.05)))
                actual_cost = round(sanction * (1 + overrun), 2)
            elif self.rng.random() < 0.5:
                actual_cost = round(sanction * float(self.rng.uniform(0.85, 1.0)), 2)

            status = ProjectStatus.ACTIVE
            if self.rng.random() > active_share:
                status = ProjectStatus(str(self.rng.choice(["Completed", "NPA", "Closed"])))

            projects.append(Project(
                project_id=f"proj_{i + 1:04d}",
                loan_id=f"LN{self.rng.integers(100000, 999999)}",
                borrower_name=f"{sector.value} {_BORROWER_SUFFIXES[i % len(_BORROWER_SUFFIXES)]} {i + 1}",
                sector=sector,
                status=status,
                sanction_amount=sanction,
                disbursed_amount=disbursed,
                actual_cost=actual_cost,
                dcco_status=slip,
            ))

        return projects
