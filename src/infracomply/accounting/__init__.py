"""RBI provisioning calculations."""

from .provisions import (
    ProvisionCalculator, ProvisionCalculation, PortfolioProvisionSummary,
    calculate_provision, aggregate_provisions,
)

__all__ = [
    "ProvisionCalculator",
    "ProvisionCalculation",
    "PortfolioProvisionSummary",
    "calculate_provision",
    "aggregate_provisions",
]
